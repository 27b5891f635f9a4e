"""
Output sinks for rendered units.

Available sinks:
- file: Writes every unit, newline-terminated, to one file
- console: Prints every unit to standard output
"""

from pathlib import Path
from typing import Optional, Union

from .base import BaseExporter, ExportResult
from .console import ConsoleExporter
from .file import FileExporter


def create_exporter(
    sink: str,
    path: Optional[Union[str, Path]] = None,
    encoding: str = 'utf-8'
) -> BaseExporter:
    """
    Create a sink by name.

    Raises:
        ValueError: If the sink name is unknown or a file sink has no path
    """
    if sink == 'console':
        return ConsoleExporter()
    if sink == 'file':
        if path is None:
            raise ValueError("The file sink needs an output path")
        return FileExporter(path, encoding=encoding)
    raise ValueError(f"Unknown output sink '{sink}'. Available sinks: console, file")


__all__ = [
    'BaseExporter',
    'ExportResult',
    'ConsoleExporter',
    'FileExporter',
    'create_exporter',
]
