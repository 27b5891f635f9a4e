"""
Core Exception Hierarchy for gitcontext

Every error carries an error code, the file or root it concerns, and
suggestions the CLI shows to the user. Only configuration and root path
errors are fatal; per-file read and traversal errors are reported and the
run continues.
"""

import sys
import time
import traceback
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCode(Enum):
    """Numeric error codes, grouped by thousand."""

    # 3xxx: configuration
    CONFIG_INVALID_FORMAT = 3001
    CONFIG_MISSING_REQUIRED = 3002
    CONFIG_INVALID_VALUE = 3003
    CONFIG_FILE_NOT_FOUND = 3004

    # 6xxx: filesystem
    FS_FILE_NOT_FOUND = 6001
    FS_PERMISSION_DENIED = 6002
    FS_INVALID_PATH = 6004
    FS_READ_FAILED = 6007
    FS_DECODE_FAILED = 6008
    FS_TRAVERSAL_FAILED = 6009

    # 9xxx: everything else
    UNKNOWN_ERROR = 9000


@dataclass
class ErrorContext:
    """Where an error happened: the operation, the file and the traversal root."""

    operation: str = ""
    file_path: Optional[str] = None
    root: Optional[str] = None
    correlation_id: Optional[str] = None
    timestamp: float = field(default_factory=time.time)
    system_info: Dict[str, Any] = field(default_factory=dict)
    user_context: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class RecoverySuggestion:
    """One thing the user can try, shown under the error panel."""

    action: str
    description: str
    command: Optional[str] = None
    priority: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class GitContextError(Exception):
    """
    Base exception for all gitcontext errors.

    Args:
        message: What went wrong, in words a user can act on
        error_code: Classification of the failure
        context: Operation, file and root involved
        cause: The exception being wrapped, if any
        recoverable: False if the run has to stop
        suggestions: Recovery suggestions, lowest priority number first
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None,
        recoverable: bool = True,
        suggestions: Optional[List[RecoverySuggestion]] = None
    ):
        super().__init__(message)

        self.message = message
        self.error_code = error_code
        self.context = context or ErrorContext()
        self.cause = cause
        self.recoverable = recoverable
        self.suggestions = sorted(suggestions or [], key=lambda s: s.priority)
        self.stack_trace = traceback.format_exc()

        self.context.correlation_id = self.context.correlation_id or uuid.uuid4().hex[:8]
        self.context.system_info = self.context.system_info or {
            'platform': sys.platform,
            'python_version': sys.version,
        }

    def add_suggestion(self, suggestion: RecoverySuggestion) -> None:
        self.suggestions.append(suggestion)
        self.suggestions.sort(key=lambda s: s.priority)

    def get_user_message(self) -> str:
        """Plain-text rendering of the error and its top three suggestions."""
        lines = [f"Error: {self.message}"]
        if self.error_code is not ErrorCode.UNKNOWN_ERROR:
            lines.append(f"Error Code: {self.error_code.value}")

        if self.suggestions:
            lines.append("")
            lines.append("Suggested solutions:")
        for number, suggestion in enumerate(self.suggestions[:3], 1):
            lines.append(f"  {number}. {suggestion.action}: {suggestion.description}")
            if suggestion.command:
                lines.append(f"     Command: {suggestion.command}")

        return "\n".join(lines)

    def get_debug_info(self) -> Dict[str, Any]:
        """Everything known about the error, for debug logging."""
        cause = self.cause
        return {
            'error_type': type(self).__name__,
            'message': self.message,
            'error_code': self.error_code.value,
            'recoverable': self.recoverable,
            'context': self.context.to_dict(),
            'cause': {
                'type': type(cause).__name__ if cause else None,
                'message': str(cause) if cause else None,
            },
            'suggestions': [s.to_dict() for s in self.suggestions],
            'stack_trace': self.stack_trace,
        }


class ConfigurationError(GitContextError):
    """Missing or invalid configuration. Raised before any traversal."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONFIG_INVALID_FORMAT,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        **kwargs
    ):
        context = kwargs.pop('context', None) or ErrorContext(operation="load_config")
        if config_key:
            context.user_context.update(config_key=config_key, config_value=config_value)
        kwargs.setdefault('recoverable', False)

        super().__init__(message, error_code=error_code, context=context, **kwargs)

        if error_code in (ErrorCode.CONFIG_FILE_NOT_FOUND, ErrorCode.CONFIG_MISSING_REQUIRED):
            self.add_suggestion(RecoverySuggestion(
                action="Create a configuration file",
                description="Write a starter gitcontext.yaml with a template and exclusion patterns.",
                command="gitcontext config init",
            ))
        elif error_code == ErrorCode.CONFIG_INVALID_VALUE:
            self.add_suggestion(RecoverySuggestion(
                action="Inspect the merged configuration",
                description="Check the values coming from config files, GITCONTEXT_* variables and options.",
                command="gitcontext config show",
            ))


class RootPathError(GitContextError):
    """The traversal root does not exist or is not a directory."""

    def __init__(self, message: str, root: Optional[str] = None, **kwargs):
        context = kwargs.pop('context', None) or ErrorContext(operation="process_directory")
        context.root = root or context.root
        kwargs.setdefault('error_code', ErrorCode.FS_INVALID_PATH)
        kwargs.setdefault('recoverable', False)

        super().__init__(message, context=context, **kwargs)

        self.add_suggestion(RecoverySuggestion(
            action="Check the directory path",
            description="Pass an existing directory as the root to process.",
        ))


class FileReadError(GitContextError):
    """A single file could not be opened, read or decoded."""

    def __init__(self, message: str, file_path: Optional[str] = None, **kwargs):
        context = kwargs.pop('context', None) or ErrorContext(operation="read_file")
        context.file_path = file_path or context.file_path
        kwargs.setdefault('error_code', ErrorCode.FS_READ_FAILED)

        super().__init__(message, context=context, **kwargs)


class TraversalError(GitContextError):
    """The directory walk could not visit an entry."""

    def __init__(self, message: str, file_path: Optional[str] = None, **kwargs):
        context = kwargs.pop('context', None) or ErrorContext(operation="walk")
        context.file_path = file_path or context.file_path
        kwargs.setdefault('error_code', ErrorCode.FS_TRAVERSAL_FAILED)

        super().__init__(message, context=context, **kwargs)


def config_error(message: str, key: Optional[str] = None, **kwargs) -> ConfigurationError:
    """Shorthand for a ConfigurationError about one configuration key."""
    return ConfigurationError(message, config_key=key, **kwargs)


_READ_ERROR_CODES = (
    (PermissionError, ErrorCode.FS_PERMISSION_DENIED),
    (FileNotFoundError, ErrorCode.FS_FILE_NOT_FOUND),
    (UnicodeDecodeError, ErrorCode.FS_DECODE_FAILED),
)


def read_error(path: Any, cause: Exception) -> FileReadError:
    """Wrap an OS or decode failure for a single file."""
    code = next(
        (code for exc_type, code in _READ_ERROR_CODES if isinstance(cause, exc_type)),
        ErrorCode.FS_READ_FAILED
    )
    return FileReadError(
        f"Cannot read {path}: {cause}",
        file_path=str(path),
        error_code=code,
        cause=cause
    )
