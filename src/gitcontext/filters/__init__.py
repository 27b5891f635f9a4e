"""
Filtering System for Source Files

Decides which files of a tree are rendered. Exclusion patterns are applied to
every ancestor directory and to the file itself; files containing a zero
byte are treated as binary and skipped.

Key Components:
- Filter: Abstract base class for all filters
- FilterChain: Ordered composition with early termination
- PathFilter: The eligibility check used by the processor
"""

from .base import Filter, FilterResult, FilterChain
from .binary import BinaryContentFilter, is_binary_file
from .exclusion import AncestorExclusionFilter, PathExclusionFilter
from .path_filter import PathFilter
from .patterns import compile_pattern, matches, wildcard_to_regex

__all__ = [
    "Filter",
    "FilterResult",
    "FilterChain",
    "BinaryContentFilter",
    "AncestorExclusionFilter",
    "PathExclusionFilter",
    "PathFilter",
    "compile_pattern",
    "matches",
    "wildcard_to_regex",
    "is_binary_file",
]
