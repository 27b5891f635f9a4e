"""
Binary content detection.

A file is binary when it contains at least one zero byte anywhere in its
content. The whole file is scanned, not a prefix.
"""

import time
from pathlib import Path
from typing import Any, Dict, Optional

from gitcontext.core.exceptions import read_error
from gitcontext.filters.base import Filter, FilterResult


def is_binary_file(path: Path) -> bool:
    """
    Check a file for zero bytes.

    Raises:
        OSError: If the file cannot be read
    """
    return b'\x00' in Path(path).read_bytes()


class BinaryContentFilter(Filter):
    """
    Reject files containing a zero byte.

    Unreadable files are rejected as well: the filter fails closed and reports
    the read failure through its logger.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)

    @property
    def name(self) -> str:
        return "binary"

    @property
    def description(self) -> str:
        return "Files containing a zero byte"

    def apply(self, path: Path) -> FilterResult:
        start_time = time.time()

        try:
            binary = is_binary_file(path)
        except OSError as e:
            error = read_error(path, e)
            self.logger.warning(error.message)
            return FilterResult(
                passed=False,
                reason="File could not be read",
                metadata={"error_code": error.error_code.value},
                execution_time=time.time() - start_time,
                error=str(e)
            )

        if binary:
            return FilterResult(
                passed=False,
                reason="File contains a zero byte",
                metadata={"binary": True},
                execution_time=time.time() - start_time
            )

        return FilterResult(
            passed=True,
            reason="Text content",
            metadata={"binary": False},
            execution_time=time.time() - start_time
        )
