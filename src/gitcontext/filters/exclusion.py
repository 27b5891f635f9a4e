"""
Pattern-based exclusion filters.

Two filters share the same matching rules: one tests every ancestor
directory of a file, the other tests the file itself. A match anywhere in
the ancestry excludes the file regardless of its own name.
"""

import time
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from gitcontext.filters.base import Filter, FilterResult
from gitcontext.filters.patterns import compile_pattern, has_separator, matches
from gitcontext.utils import to_posix


class ExclusionPatternFilter(Filter):
    """
    Common matching logic for exclusion filters.

    Configuration options:
    - exclude_patterns: Wildcard patterns (``**``, ``*``, ``?``, literal ``.``)
    - root: Traversal root. When set, entries below it are also matched by
      their root-relative path and, for patterns without ``/``, by name.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.exclude_patterns: Tuple[str, ...] = tuple(self.config.get('exclude_patterns') or ())
        root = self.config.get('root')
        self.root: Optional[Path] = Path(root).resolve() if root is not None else None

    @property
    def name(self) -> str:
        return "exclusion"

    @property
    def description(self) -> str:
        if not self.exclude_patterns:
            return "No exclusion patterns (all paths pass)"
        preview = ', '.join(self.exclude_patterns[:3])
        suffix = "..." if len(self.exclude_patterns) > 3 else ""
        return f"Paths matching: {preview}{suffix}"

    def validate_config(self) -> List[str]:
        errors = []
        for pattern in self.exclude_patterns:
            if not isinstance(pattern, str) or not pattern:
                errors.append(f"Invalid exclusion pattern: {pattern!r}")
                continue
            try:
                compile_pattern(pattern)
            except Exception as e:
                errors.append(f"Cannot compile pattern {pattern!r}: {e}")
        return errors

    def _candidates(self, path: Path, include_name: bool) -> Iterator[Tuple[str, bool]]:
        """
        Yield ``(candidate, name_only)`` strings to test for ``path``.

        ``name_only`` candidates are only tested against patterns that do not
        contain a separator.
        """
        yield to_posix(path), False

        if self._is_below_root(path):
            yield path.relative_to(self.root).as_posix(), False
        if include_name and path.name:
            yield path.name, True

    def matching_pattern(self, path: Path, include_name: bool = True) -> Optional[str]:
        """Return the first pattern matching ``path``, or None."""
        candidates = list(self._candidates(path, include_name))
        for pattern in self.exclude_patterns:
            bare = not has_separator(pattern)
            for candidate, name_only in candidates:
                if name_only and not bare:
                    continue
                if matches(pattern, candidate):
                    return pattern
        return None

    def _is_below_root(self, path: Path) -> bool:
        return self.root is not None and path != self.root and self.root in path.parents


class AncestorExclusionFilter(ExclusionPatternFilter):
    """Reject files that live inside an excluded directory."""

    @property
    def name(self) -> str:
        return "ancestor_exclusion"

    @property
    def description(self) -> str:
        return f"Directories excluded by pattern ({super().description})"

    def apply(self, path: Path) -> FilterResult:
        start_time = time.time()

        if not self.exclude_patterns:
            return FilterResult(
                passed=True,
                reason="No exclusion patterns configured",
                execution_time=time.time() - start_time
            )

        for ancestor in path.parents:
            # Names are only meaningful inside the tree being processed
            pattern = self.matching_pattern(ancestor, include_name=self._is_below_root(ancestor))
            if pattern is not None:
                return FilterResult(
                    passed=False,
                    reason=f"Directory {ancestor} matches exclusion pattern '{pattern}'",
                    metadata={"pattern": pattern, "excluded_path": str(ancestor)},
                    execution_time=time.time() - start_time
                )

        return FilterResult(
            passed=True,
            reason="No ancestor directory excluded",
            execution_time=time.time() - start_time
        )


class PathExclusionFilter(ExclusionPatternFilter):
    """Reject files whose own path matches an exclusion pattern."""

    @property
    def name(self) -> str:
        return "path_exclusion"

    def apply(self, path: Path) -> FilterResult:
        start_time = time.time()

        pattern = self.matching_pattern(path, include_name=True)
        if pattern is not None:
            return FilterResult(
                passed=False,
                reason=f"File matches exclusion pattern '{pattern}'",
                metadata={"pattern": pattern, "excluded_path": str(path)},
                execution_time=time.time() - start_time
            )

        return FilterResult(
            passed=True,
            reason="File matches no exclusion pattern",
            execution_time=time.time() - start_time
        )
