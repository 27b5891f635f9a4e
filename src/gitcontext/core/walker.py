"""
Directory traversal.

Depth-first walk yielding every file under a root. Entries the walk cannot
visit are reported and skipped; the walk itself never aborts on them.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Iterator, Optional, Union

from gitcontext.core.exceptions import TraversalError

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[TraversalError], None]


def _report(error: TraversalError) -> None:
    logger.warning(error.message)


def walk_files(
    root: Union[str, Path],
    sort: bool = True,
    follow_symlinks: bool = False,
    on_error: Optional[ErrorCallback] = None
) -> Iterator[Path]:
    """
    Yield every file below ``root``, depth first.

    Files of a directory are yielded before its subdirectories are entered.

    Args:
        root: Directory to walk
        sort: Visit siblings in name order instead of filesystem order
        follow_symlinks: Descend into symlinked directories
        on_error: Called with a TraversalError for every entry that cannot
            be visited; defaults to logging a warning

    Yields:
        Path of each file, joined onto ``root``
    """
    report = on_error or _report

    def handle_walk_error(exc: OSError) -> None:
        report(TraversalError(
            f"Failed to visit {exc.filename}: {exc.strerror or exc}",
            file_path=exc.filename,
            cause=exc
        ))

    for dirpath, dirnames, filenames in os.walk(
        root, onerror=handle_walk_error, followlinks=follow_symlinks
    ):
        if sort:
            # os.walk honours in-place edits of dirnames
            dirnames.sort()
            filenames.sort()
        for filename in filenames:
            yield Path(dirpath) / filename
