"""
Base Exporter Classes

Abstract base class for output sinks. A sink is opened once per run,
receives rendered units one at a time in traversal order, and is closed at
the end. Sinks never decide what gets rendered.
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional


@dataclass
class ExportResult:
    """Result of an export operation."""
    success: bool = True
    output_path: Optional[str] = None
    records_exported: int = 0
    format_name: str = ""
    execution_time: float = 0.0
    errors: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_error(self, error: str) -> None:
        """Add an error to the result."""
        self.errors.append(error)
        self.success = False


class BaseExporter(ABC):
    """
    Abstract base class for all output sinks.

    Usable as a context manager::

        with FileExporter("context.txt") as sink:
            sink.write(text)
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.records_written = 0

    @property
    @abstractmethod
    def name(self) -> str:
        """Short sink name used in configuration."""
        pass

    @property
    def destination(self) -> Optional[str]:
        """Human-readable destination, e.g. a file path."""
        return None

    @abstractmethod
    def open(self) -> None:
        """Prepare the destination. Called once before the first write."""
        pass

    @abstractmethod
    def write(self, text: str) -> None:
        """Emit one rendered unit."""
        pass

    def close(self) -> None:
        """Release the destination."""
        pass

    def export(self, units: Iterable[str]) -> ExportResult:
        """
        Write every unit and report the outcome.

        Args:
            units: Rendered units in output order

        Returns:
            ExportResult with the number of units written
        """
        start_time = time.time()
        result = ExportResult(output_path=self.destination, format_name=self.name)

        try:
            with self:
                for text in units:
                    self.write(text)
        except OSError as e:
            self.logger.error(f"Failed to write output to {self.destination or self.name}: {e}")
            result.add_error(str(e))

        result.records_exported = self.records_written
        result.execution_time = time.time() - start_time
        return result

    def __enter__(self) -> 'BaseExporter':
        self.records_written = 0
        self.open()
        return self

    def __exit__(self, exc_type, exc_value, tb) -> None:
        self.close()
