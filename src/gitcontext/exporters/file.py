"""
File output sink.

Truncates the destination when opened and writes each rendered unit
followed by a newline.
"""

from pathlib import Path
from typing import IO, Optional, Union

from gitcontext.exporters.base import BaseExporter


class FileExporter(BaseExporter):
    """Writes rendered units to a single text file."""

    def __init__(self, path: Union[str, Path], encoding: str = 'utf-8'):
        super().__init__()
        self.path = Path(path)
        self.encoding = encoding
        self._handle: Optional[IO[str]] = None

    @property
    def name(self) -> str:
        return "file"

    @property
    def destination(self) -> str:
        return str(self.path)

    def open(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # newline='' so rendered content keeps its own line endings
        self._handle = open(self.path, 'w', encoding=self.encoding, newline='')
        self.logger.debug(f"Writing output to {self.path}")

    def write(self, text: str) -> None:
        if self._handle is None:
            raise RuntimeError("FileExporter.write() called before open()")
        self._handle.write(text)
        self._handle.write('\n')
        self.records_written += 1

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
