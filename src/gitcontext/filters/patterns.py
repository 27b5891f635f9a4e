"""
Wildcard pattern compilation.

Exclusion patterns understand four tokens:

- ``**`` matches any run of characters, path separators included
- ``*`` matches any run of characters except ``/``
- ``?`` matches exactly one character
- ``.`` is a literal dot

Every other character is matched literally. The compiled expression is
anchored, so a pattern has to describe the whole candidate string.
"""

import re
from functools import lru_cache
from typing import Iterable, Pattern

SEPARATOR = "/"


def wildcard_to_regex(wildcard: str) -> str:
    """
    Translate a wildcard pattern into an anchored regular expression.

    ``**`` is consumed before the single star rule so a double star is
    never read as two single stars.

    Examples:
        >>> wildcard_to_regex("*.log")
        '^[^/]*\\\\.log$'
        >>> wildcard_to_regex("src/**")
        '^src/.*$'
    """
    parts = []
    i = 0
    length = len(wildcard)
    while i < length:
        char = wildcard[i]
        if char == '*':
            if wildcard.startswith('**', i):
                parts.append('.*')
                i += 2
                continue
            parts.append(f'[^{SEPARATOR}]*')
        elif char == '?':
            parts.append('.')
        else:
            parts.append(re.escape(char))
        i += 1
    return '^' + ''.join(parts) + '$'


@lru_cache(maxsize=1024)
def compile_pattern(wildcard: str) -> Pattern[str]:
    """Compile a wildcard pattern, memoised by pattern text."""
    return re.compile(wildcard_to_regex(wildcard), re.DOTALL)


def matches(wildcard: str, candidate: str) -> bool:
    """Return True if ``candidate`` matches ``wildcard`` in full."""
    return compile_pattern(wildcard).fullmatch(candidate) is not None


def matches_any(patterns: Iterable[str], candidate: str) -> bool:
    """Return True if any of ``patterns`` matches ``candidate``."""
    return any(matches(pattern, candidate) for pattern in patterns)


def has_separator(wildcard: str) -> bool:
    """Whether a pattern names a path (contains ``/``) rather than a bare name."""
    return SEPARATOR in wildcard
