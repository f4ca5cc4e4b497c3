"""
Centralized error message templates for deplock.

This module provides:
- Consistent error message templates
- User-friendly formatting
- Actionable suggestions

Usage:
    from deplock.error_messages import format_error, ERROR_MESSAGES

    msg = format_error('LOCK_VERSION_MISMATCH', expected='a:b:1.0', actual='a:b:2.0')
"""

from typing import Dict, Any, Optional


# Error message templates with placeholders
ERROR_MESSAGES: Dict[str, str] = {
    # Lock consistency
    'LOCK_MODULE_MISSING': (
        "Lock file contained module '{expected}' but it is not part of the resolved modules"
    ),

    'LOCK_VERSION_MISMATCH': (
        "Lock file expected '{expected}' but resolution result was '{actual}'"
    ),

    'LOCK_ENTRY_MALFORMED': (
        "Lock entry '{line}' is not of the form group:name:version"
    ),

    # Lock file I/O
    'LOCK_READ_FAILED': "Unable to load lock file for configuration '{configuration}'",
    'LOCK_WRITE_FAILED': "Unable to write lock file for configuration '{configuration}'",
    'LOCK_DIR_FAILED': "Issue creating dependency-lock directory {path}",

    # Resolution documents
    'RESOLUTION_FILE_NOT_FOUND': (
        "Resolution file not found: {path}\n"
        "Pass the resolution output of your build as YAML or JSON."
    ),

    'RESOLUTION_FILE_INVALID': (
        "Invalid resolution file: {path}\n"
        "Error: {error}"
    ),

    'INTERNAL_ERROR': (
        "An internal error occurred: {error}\n"
        "This is likely a bug in deplock.\n"
        "Include the full error message and stack trace when reporting it."
    ),
}


def format_error(error_key: str, **kwargs) -> str:
    """
    Format an error message with the given parameters.

    Args:
        error_key: Key for the error message template.
        **kwargs: Parameters to substitute in the template.

    Returns:
        Formatted error message string.

    Example:
        >>> format_error('LOCK_MODULE_MISSING', expected='a:b:1.0')
        "Lock file contained module 'a:b:1.0' but it is not part of the resolved modules"
    """
    template = ERROR_MESSAGES.get(error_key)
    if template is None:
        return f"Unknown error: {error_key}\nContext: {kwargs}"

    try:
        return template.format(**kwargs)
    except KeyError as e:
        return f"{template}\n(Missing format parameter: {e})"


def get_error_template(error_key: str) -> Optional[str]:
    """Get the raw error template for a given key, or None."""
    return ERROR_MESSAGES.get(error_key)


class ErrorFormatter:
    """
    Helper class for formatting errors with consistent styling.
    """

    # ANSI color codes
    COLORS = {
        'reset': '\033[0m',
        'bold': '\033[1m',
        'red': '\033[91m',
        'yellow': '\033[93m',
        'cyan': '\033[96m',
    }

    def __init__(self, use_colors: bool = True):
        self.use_colors = use_colors

    def _color(self, text: str, color: str) -> str:
        if self.use_colors and color in self.COLORS:
            return f"{self.COLORS[color]}{text}{self.COLORS['reset']}"
        return text

    def format_error_header(self, code: str, title: str) -> str:
        return self._color(f"[{code}] {title}", 'red')

    def format_suggestion(self, suggestion: str) -> str:
        prefix = self._color("Suggestion:", 'cyan')
        return f"{prefix} {suggestion}"

    def format_details(self, details: Dict[str, Any]) -> str:
        lines = []
        for key, value in details.items():
            if value is None:
                continue
            key_styled = self._color(f"{key}:", 'bold')
            lines.append(f"  {key_styled} {value}")
        return "\n".join(lines)

    def format_exception(self, exc) -> str:
        """
        Format a DeplockException for terminal output.

        Args:
            exc: Exception carrying a ``DeplockError`` in ``exc.error``.

        Returns:
            Header, context details and suggestion, one per line.
        """
        error = exc.error
        parts = [self.format_error_header(error.code.value, error.message)]

        details = self.format_details(error.context)
        if details:
            parts.append(details)

        if error.suggestion:
            parts.append("")
            parts.append(self.format_suggestion(error.suggestion))

        return "\n".join(parts)
