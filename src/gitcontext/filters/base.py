"""
Abstract Filter Base Classes

Defines the core interfaces for path filters. Every filter implements the
Filter abstract base class and returns a FilterResult describing whether the
file may be processed and why.
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class FilterResult:
    """
    Result of applying a filter to a file path.

    Attributes:
        passed: Whether the file may be processed
        reason: Human-readable reason for pass/fail
        metadata: Additional filter-specific metadata
        execution_time: Time taken to apply filter (seconds)
        error: Error message if the filter could not decide (fails closed)
    """
    passed: bool
    reason: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)
    execution_time: float = 0.0
    error: Optional[str] = None


class Filter(ABC):
    """
    Abstract base class for all path filters.

    Filters receive an absolute, normalised path and must not keep state
    between calls.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the filter with configuration.

        Args:
            config: Filter configuration dictionary
        """
        self.config = config or {}
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier of the filter."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what the filter does."""
        pass

    @abstractmethod
    def apply(self, path: Path) -> FilterResult:
        """
        Apply the filter to a file.

        Args:
            path: Absolute, normalised file path

        Returns:
            FilterResult indicating whether the file passed the filter
        """
        pass

    def validate_config(self) -> List[str]:
        """
        Validate the filter configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        return []

    def __str__(self) -> str:
        return f"{self.name}: {self.description}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(config={self.config})"


class FilterChain:
    """
    Runs filters in order and stops at the first one that rejects.

    Order matters: cheap name checks run before filters that read file
    content, so excluded directories are never opened.
    """

    def __init__(self, filters: List[Filter]):
        """
        Initialize the filter chain.

        Args:
            filters: Filters to apply, in order
        """
        self.filters = filters
        self.logger = logging.getLogger(__name__)

    def apply(self, path: Path) -> FilterResult:
        """
        Apply every filter in the chain to a file.

        Args:
            path: Absolute, normalised file path

        Returns:
            FilterResult of the first failing filter, or a passing result
        """
        start_time = time.time()

        if not self.filters:
            return FilterResult(
                passed=True,
                reason="No filters in chain",
                execution_time=time.time() - start_time
            )

        executed = []
        for filter_instance in self.filters:
            try:
                result = filter_instance.apply(path)
            except Exception as e:
                self.logger.error(f"Error applying filter {filter_instance.name} to {path}: {e}")
                result = FilterResult(
                    passed=False,
                    reason=f"Filter error: {e}",
                    error=str(e)
                )
            executed.append({
                "filter": filter_instance.name,
                "passed": result.passed,
                "reason": result.reason,
            })

            if not result.passed:
                metadata = dict(result.metadata)
                metadata.update({
                    "failed_filter": filter_instance.name,
                    "filters_executed": len(executed),
                    "total_filters": len(self.filters),
                    "individual_results": executed,
                })
                return FilterResult(
                    passed=False,
                    reason=f"Failed {filter_instance.name}: {result.reason}",
                    metadata=metadata,
                    execution_time=time.time() - start_time,
                    error=result.error
                )

        return FilterResult(
            passed=True,
            reason="All filters passed",
            metadata={
                "filters_executed": len(executed),
                "total_filters": len(self.filters),
                "individual_results": executed,
            },
            execution_time=time.time() - start_time
        )

    def validate_config(self) -> List[str]:
        """Validate all filters in the chain."""
        errors = []
        for filter_instance in self.filters:
            filter_errors = filter_instance.validate_config()
            errors.extend([f"{filter_instance.name}: {error}" for error in filter_errors])
        return errors

    def __len__(self) -> int:
        return len(self.filters)

    def __str__(self) -> str:
        return f"FilterChain({' -> '.join(f.name for f in self.filters)})"
