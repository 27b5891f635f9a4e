"""
Console output sink.

Writes rendered units to the stream of a rich console. The text bypasses
rich rendering, which would expand tabs and drop control characters such
as carriage returns.
"""

from typing import Optional

from rich.console import Console

from gitcontext.exporters.base import BaseExporter


class ConsoleExporter(BaseExporter):
    """Prints rendered units to standard output."""

    def __init__(self, console: Optional[Console] = None):
        super().__init__()
        self.console = console or Console(soft_wrap=True)

    @property
    def name(self) -> str:
        return "console"

    @property
    def destination(self) -> str:
        return "console"

    def open(self) -> None:
        pass

    def close(self) -> None:
        self.console.file.flush()

    def write(self, text: str) -> None:
        self.console.file.write(text)
        self.console.file.write("\n")
        self.records_written += 1
