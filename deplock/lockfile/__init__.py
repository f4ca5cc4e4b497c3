"""
Lock file subsystem for deplock.

Lock files pin the module versions each configuration resolved to, one file
per configuration, so later resolutions can be constrained and audited.

Public exports:
    LOCKFILE_HEADER: Comment block written at the top of every lock file
    parse_lines / parse_text: Read entry lines, dropping comments and blanks
    serialize: Render module -> version as lock file text
    split_entry: Split a lock line into (module, version)
    ModuleCoordinate, LockEntry: Lock data types
    LockStore: Per-configuration lock files under a root directory
    validate_lock: Raise LockOutOfDateException on the first drifted entry
    compare_lock / format_validation_report: Non-raising full report
"""

from deplock.lockfile.codec import (
    LOCKFILE_HEADER,
    parse_lines,
    parse_text,
    serialize,
    split_entry,
    join_entry,
)
from deplock.lockfile.models import (
    ModuleCoordinate,
    LockEntry,
    EntryResult,
    LockValidationResult,
)
from deplock.lockfile.store import LockStore
from deplock.lockfile.validator import (
    check_entry,
    validate_lock,
    compare_lock,
    format_validation_report,
)

__all__ = [
    # Codec
    "LOCKFILE_HEADER",
    "parse_lines",
    "parse_text",
    "serialize",
    "split_entry",
    "join_entry",
    # Models
    "ModuleCoordinate",
    "LockEntry",
    "EntryResult",
    "LockValidationResult",
    # Store
    "LockStore",
    # Validator
    "check_entry",
    "validate_lock",
    "compare_lock",
    "format_validation_report",
]
