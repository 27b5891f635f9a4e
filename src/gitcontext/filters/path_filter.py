"""
PathFilter: decides whether a file is eligible for rendering.

Checks run in a fixed order with early termination:

1. every ancestor directory against the exclusion patterns
2. the file content for zero bytes
3. the file's own path against the exclusion patterns
"""

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from gitcontext.core.exceptions import read_error
from gitcontext.filters.base import FilterChain, FilterResult
from gitcontext.filters.binary import BinaryContentFilter
from gitcontext.filters.exclusion import AncestorExclusionFilter, PathExclusionFilter


class PathFilter:
    """
    Eligibility check for candidate files.

    Pure apart from the filesystem read done by the binary check. The
    exclusion set is fixed at construction.
    """

    def __init__(
        self,
        exclude_patterns: Optional[Iterable[str]] = None,
        root: Optional[Union[str, Path]] = None
    ):
        """
        Args:
            exclude_patterns: Wildcard exclusion patterns
            root: Traversal root, enables root-relative and name matching
        """
        self.exclude_patterns = tuple(exclude_patterns or ())
        self.root = Path(root).resolve() if root is not None else None
        self.logger = logging.getLogger(__name__)

        config = {'exclude_patterns': self.exclude_patterns, 'root': self.root}
        self.chain = FilterChain([
            AncestorExclusionFilter(config),
            BinaryContentFilter(),
            PathExclusionFilter(config),
        ])

        errors = self.chain.validate_config()
        for error in errors:
            self.logger.warning(error)

    def evaluate(self, path: Union[str, Path]) -> FilterResult:
        """Run the filter chain and return the detailed result."""
        try:
            normalized = Path(path).resolve()
        except (OSError, RuntimeError) as e:
            # Unresolvable paths (e.g. symlink loops) fail closed
            error = read_error(path, e)
            self.logger.warning(error.message)
            return FilterResult(
                passed=False,
                reason="Path could not be resolved",
                metadata={"error_code": error.error_code.value},
                error=str(e)
            )

        result = self.chain.apply(normalized)
        if not result.passed:
            self.logger.debug(f"Skipping {normalized}: {result.reason}")
        return result

    def should_process(self, path: Union[str, Path]) -> bool:
        """Return True if the file should be rendered."""
        return self.evaluate(path).passed

    def __repr__(self) -> str:
        return f"PathFilter(exclude_patterns={list(self.exclude_patterns)!r}, root={self.root!r})"
