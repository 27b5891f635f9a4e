"""
Context Processor

Composes the directory walk, the PathFilter and the TemplateRenderer into a
single pass over a tree. Rendered units come out in traversal order; where
they go is up to the caller.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Union

from gitcontext.core.config.models import AppConfig
from gitcontext.core.exceptions import FileReadError, RootPathError, TraversalError, read_error
from gitcontext.core.templates import FileDescriptor, TemplateRenderer
from gitcontext.core.walker import walk_files
from gitcontext.exporters.base import BaseExporter, ExportResult
from gitcontext.filters import PathFilter


@dataclass
class RenderedUnit:
    """Rendered text for one file together with its metadata."""
    text: str
    descriptor: FileDescriptor


@dataclass
class ProcessingStats:
    """Counters for one run."""
    visited: int = 0
    processed: int = 0
    excluded: int = 0
    binary: int = 0
    failed: int = 0
    start_time: float = field(default_factory=time.time)
    end_time: Optional[float] = None

    @property
    def duration(self) -> float:
        end = self.end_time if self.end_time is not None else time.time()
        return end - self.start_time

    def to_dict(self) -> dict:
        return {
            'visited': self.visited,
            'processed': self.processed,
            'excluded': self.excluded,
            'binary': self.binary,
            'failed': self.failed,
            'duration': self.duration,
        }


class ContextProcessor:
    """
    Walks a directory and renders every eligible file.

    Per-file failures (unreadable files, entries the walk cannot visit) are
    logged and counted; they never stop the run. Only an invalid root or a
    missing template is fatal, and both are raised before traversal starts.
    """

    def __init__(self, config: Optional[AppConfig] = None):
        """
        Args:
            config: Application configuration, defaults to AppConfig()

        Raises:
            ConfigurationError: If no template can be resolved
        """
        self.config = config or AppConfig()
        self.logger = logging.getLogger(__name__)
        self.template = self.config.resolve_template()
        self.renderer = TemplateRenderer(
            self.template,
            encoding=self.config.encoding,
            decode_errors=self.config.decode_errors
        )
        self.stats = ProcessingStats()
        self.errors: List[Exception] = []

    def _validate_root(self, root: Union[str, Path]) -> Path:
        path = Path(root)
        if not path.exists():
            raise RootPathError(f"Directory does not exist: {root}", root=str(root))
        if not path.is_dir():
            raise RootPathError(f"Not a directory: {root}", root=str(root))
        return path

    def _on_traversal_error(self, error: TraversalError) -> None:
        self.logger.warning(error.message)
        self.stats.failed += 1
        self.errors.append(error)

    def _output_file(self) -> Optional[Path]:
        if self.config.output.sink != 'file':
            return None
        return Path(self.config.output.path).resolve()

    def iter_units(self, root: Union[str, Path]) -> Iterator[RenderedUnit]:
        """
        Lazily render every eligible file under ``root``.

        Raises:
            RootPathError: If ``root`` is missing or not a directory
        """
        root_path = self._validate_root(root)
        path_filter = PathFilter(self.config.exclude_patterns, root=root_path)
        output_file = self._output_file()

        self.stats = ProcessingStats()
        self.errors = []
        self.logger.info(f"Processing {root_path.resolve()}")

        for file_path in walk_files(
            root_path,
            sort=self.config.sort_entries,
            follow_symlinks=self.config.follow_symlinks,
            on_error=self._on_traversal_error,
        ):
            self.stats.visited += 1

            try:
                resolved = file_path.resolve()
            except (OSError, RuntimeError) as e:
                # RuntimeError is how Python < 3.13 reports a symlink loop
                error = read_error(file_path, e)
                self.logger.warning(error.message)
                self.stats.failed += 1
                self.errors.append(error)
                continue

            if output_file is not None and resolved == output_file:
                self.logger.debug(f"Skipping output file {file_path}")
                self.stats.excluded += 1
                continue

            result = path_filter.evaluate(file_path)
            if not result.passed:
                if result.error:
                    self.stats.failed += 1
                elif result.metadata.get('binary'):
                    self.stats.binary += 1
                else:
                    self.stats.excluded += 1
                continue

            try:
                descriptor = self.renderer.describe(file_path)
                content = self.renderer.read_content(file_path)
            except FileReadError as e:
                self.logger.warning(e.message)
                self.stats.failed += 1
                self.errors.append(e)
                continue

            self.stats.processed += 1
            self.logger.debug(f"Rendered {file_path}")
            yield RenderedUnit(
                text=self.renderer.render_descriptor(descriptor, content),
                descriptor=descriptor,
            )

        self.stats.end_time = time.time()
        self.logger.info(
            f"Processed {self.stats.processed} of {self.stats.visited} files "
            f"({self.stats.excluded} excluded, {self.stats.binary} binary, {self.stats.failed} failed)"
        )

    def process_directory(self, root: Union[str, Path]) -> List[str]:
        """
        Render every eligible file under ``root`` into memory.

        Returns:
            Rendered texts in traversal order
        """
        return [unit.text for unit in self.iter_units(root)]

    def export(self, root: Union[str, Path], exporter: BaseExporter) -> ExportResult:
        """
        Stream rendered units into ``exporter``.

        The root is validated before the sink is opened, so an invalid root
        never truncates an existing output file.
        """
        self._validate_root(root)
        result = exporter.export(unit.text for unit in self.iter_units(root))
        result.metadata.update(self.stats.to_dict())
        return result
