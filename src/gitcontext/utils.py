"""
Utility functions for gitcontext.

Small helpers shared by the filter and template layers: POSIX path strings,
file extension extraction and local timestamp formatting.
"""

import os
from datetime import datetime
from pathlib import Path
from typing import Union


def to_posix(path: Union[str, Path]) -> str:
    """
    Return the string form of a path with forward slash separators.

    Exclusion patterns are written with ``/`` on every platform, so candidate
    paths are compared in this form.
    """
    return Path(path).as_posix()


def get_file_extension(filename: str) -> str:
    """
    Get the extension of a file name without the leading dot.

    Args:
        filename: Bare file name (no directory part)

    Returns:
        str: Text after the last dot, or an empty string when there is no dot
        or the only dot is the first character.

    Examples:
        >>> get_file_extension("archive.tar.gz")
        'gz'
        >>> get_file_extension(".gitignore")
        ''
        >>> get_file_extension("Makefile")
        ''
    """
    index = filename.rfind('.')
    if index <= 0:
        return ""
    return filename[index + 1:]


def format_timestamp(timestamp: float) -> str:
    """
    Format a POSIX timestamp as a local ISO-8601 date-time.

    Fractional seconds are included only when non-zero, e.g.
    ``2024-01-15T10:30:00`` or ``2024-01-15T10:30:00.250000``.
    """
    return datetime.fromtimestamp(timestamp).isoformat()


def creation_timestamp(stat_result: os.stat_result) -> float:
    """
    Best available creation time for a stat result.

    Uses ``st_birthtime`` where the platform reports it and falls back to
    ``st_ctime`` (inode change time on Linux).
    """
    birthtime = getattr(stat_result, 'st_birthtime', None)
    if birthtime is not None:
        return birthtime
    return stat_result.st_ctime
