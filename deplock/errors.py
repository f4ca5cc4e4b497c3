"""
Custom exceptions for deplock.

This module provides custom exception classes with user-friendly messaging
that include:
- Clear error descriptions
- Technical details for debugging
- Actionable suggestions for resolution

All exceptions follow a consistent pattern of providing both machine-readable
error codes and human-readable messages with suggestions.
"""

from dataclasses import dataclass, field
from typing import Optional, Any
from enum import Enum


class ErrorCode(Enum):
    """Machine-readable error codes for deplock errors."""
    # Lock consistency errors (1xx)
    LOCK_MODULE_MISSING = "E101"
    LOCK_VERSION_MISMATCH = "E102"
    LOCK_ENTRY_MALFORMED = "E103"

    # Lock file I/O errors (2xx)
    IO_READ_FAILED = "E201"
    IO_WRITE_FAILED = "E202"
    IO_DIRECTORY_FAILED = "E203"

    # Configuration errors (3xx)
    CONFIG_INVALID_VALUE = "E301"
    CONFIG_FILE_NOT_FOUND = "E302"
    CONFIG_PARSE_ERROR = "E303"
    CONFIG_ALREADY_RESOLVED = "E304"

    # Internal errors (9xx)
    INTERNAL_ERROR = "E901"


@dataclass
class DeplockError:
    """
    Structured error information for deplock.

    Attributes:
        code: Machine-readable error code.
        message: User-facing error message.
        details: Technical details for debugging.
        suggestion: How to fix the issue.
        context: Additional context information.
    """
    code: ErrorCode
    message: str
    details: str = ""
    suggestion: str = ""
    context: dict = field(default_factory=dict)

    def __str__(self) -> str:
        """Format error for display."""
        lines = [f"[{self.code.value}] {self.message}"]
        if self.details:
            lines.append(f"  Details: {self.details}")
        if self.suggestion:
            lines.append(f"  Suggestion: {self.suggestion}")
        return "\n".join(lines)


class DeplockException(Exception):
    """
    Base exception class for deplock.

    All custom exceptions inherit from this class and provide
    structured error information.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INTERNAL_ERROR,
                 details: str = "", suggestion: str = "", **context):
        self.error = DeplockError(
            code=code,
            message=message,
            details=details,
            suggestion=suggestion,
            context=context
        )
        super().__init__(str(self.error))

    @property
    def code(self) -> ErrorCode:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def suggestion(self) -> str:
        return self.error.suggestion

    @property
    def context(self) -> dict:
        return self.error.context


class LockOutOfDateException(DeplockException):
    """
    Raised when a resolution no longer matches the recorded lock.

    Examples:
        - A locked module is no longer part of the resolved modules
        - A locked module resolved to a different version
    """

    def __init__(self, message: str, configuration: str = None,
                 expected: str = None, actual: str = None,
                 suggestion: str = None,
                 code: ErrorCode = ErrorCode.LOCK_VERSION_MISMATCH):
        details_parts = []
        if configuration:
            details_parts.append(f"Configuration: {configuration}")
        if expected is not None:
            details_parts.append(f"Expected: {expected}")
        if actual is not None:
            details_parts.append(f"Actual: {actual}")

        super().__init__(
            message=message,
            code=code,
            details="; ".join(details_parts) if details_parts else "",
            suggestion=suggestion or self._default_suggestion(code),
            configuration=configuration,
            expected=expected,
            actual=actual
        )

    @staticmethod
    def _default_suggestion(code: ErrorCode) -> str:
        suggestions = {
            ErrorCode.LOCK_MODULE_MISSING: (
                "The module was dropped from the dependency graph; re-run with --write-locks "
                "to update the lock file"
            ),
            ErrorCode.LOCK_VERSION_MISMATCH: (
                "Re-run with --write-locks to record the new version, or fix the dependency declarations"
            ),
        }
        return suggestions.get(code, "Re-run with --write-locks to update the lock file")


class IOFailure(DeplockException):
    """
    Raised when a lock file or the lock directory cannot be accessed.

    Examples:
        - Lock file exists but is unreadable
        - Lock file cannot be written
        - Lock directory cannot be created
    """

    def __init__(self, message: str, path: str = None,
                 operation: str = None, cause: Optional[BaseException] = None,
                 suggestion: str = None,
                 code: ErrorCode = ErrorCode.IO_READ_FAILED):
        details_parts = []
        if path:
            details_parts.append(f"Path: {path}")
        if operation:
            details_parts.append(f"Operation: {operation}")
        if cause is not None:
            details_parts.append(f"Cause: {cause}")

        super().__init__(
            message=message,
            code=code,
            details="; ".join(details_parts) if details_parts else "",
            suggestion=suggestion or self._default_suggestion(code),
            path=path,
            operation=operation
        )

    @staticmethod
    def _default_suggestion(code: ErrorCode) -> str:
        suggestions = {
            ErrorCode.IO_READ_FAILED: "Check that the lock file is readable and valid UTF-8",
            ErrorCode.IO_WRITE_FAILED: "Check file permissions and free disk space",
            ErrorCode.IO_DIRECTORY_FAILED: "Check permissions on the parent of the lock directory",
        }
        return suggestions.get(code, "Check file system and try again")


class MalformedLockEntryError(DeplockException):
    """
    Raised when a lock line is not of the form ``group:name:version``.
    """

    def __init__(self, message: str, line: str = None, path: str = None,
                 suggestion: str = None):
        details_parts = []
        if line is not None:
            details_parts.append(f"Line: {line!r}")
        if path:
            details_parts.append(f"Path: {path}")

        super().__init__(
            message=message,
            code=ErrorCode.LOCK_ENTRY_MALFORMED,
            details="; ".join(details_parts) if details_parts else "",
            suggestion=suggestion or "Fix or delete the line, or regenerate the lock with --write-locks",
            line=line,
            path=path
        )


class ConfigurationError(DeplockException):
    """
    Raised when settings or a resolution document are invalid.

    Examples:
        - Unknown or mistyped setting
        - Settings file not found
        - Resolution document with an invalid component
        - Configuration resolved twice in one build
    """

    def __init__(self, message: str, parameter: str = None,
                 expected: Any = None, actual: Any = None,
                 suggestion: str = None,
                 code: ErrorCode = ErrorCode.CONFIG_INVALID_VALUE):
        details_parts = []
        if parameter:
            details_parts.append(f"Parameter: {parameter}")
        if expected is not None:
            details_parts.append(f"Expected: {expected}")
        if actual is not None:
            details_parts.append(f"Actual: {actual}")

        super().__init__(
            message=message,
            code=code,
            details="; ".join(details_parts) if details_parts else "",
            suggestion=suggestion or self._default_suggestion(code),
            parameter=parameter,
            expected=expected,
            actual=actual
        )

    @staticmethod
    def _default_suggestion(code: ErrorCode) -> str:
        suggestions = {
            ErrorCode.CONFIG_INVALID_VALUE: "Check the value and correct it",
            ErrorCode.CONFIG_FILE_NOT_FOUND: "Verify the file path exists",
            ErrorCode.CONFIG_PARSE_ERROR: "Check file syntax (YAML format)",
            ErrorCode.CONFIG_ALREADY_RESOLVED: "Resolve each configuration once per build",
        }
        return suggestions.get(code, "Check the configuration and try again")
