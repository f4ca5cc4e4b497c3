"""
Configuration constants and settings for deplock.

This module holds the constants shared by the lock-file subsystem and the
CLI, and the ``LockingSettings`` dataclass that can be loaded from a YAML
file and overridden from the command line.

Settings file example (``deplock.yaml``):

    lock_dir: gradle/dependency-locks
    max_workers: 4
    freeze_mode: false
    validate_before_write: true
    retain_snapshots: true
"""

import enum
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from deplock.errors import ConfigurationError, ErrorCode

TOOL_NAME = "deplock"

FILE_SUFFIX = ".lockfile"
FILE_GLOB = "*" + FILE_SUFFIX
DEPENDENCY_LOCKING_FOLDER = "dependency-locks"
LOCKFILE_ENCODING = "utf-8"
# Lock files are hand-edited; accept a leading BOM on read
LOCKFILE_READ_ENCODING = "utf-8-sig"

LOCK_CONSTRAINT_REASON = "dependency-locking in place"

DEFAULT_SETTINGS_FILE = "deplock.yaml"
SETTINGS_FILE_ENV = "DEPLOCK_CONFIG"
DEFAULT_MAX_WORKERS = 4


class EXIT_CODE(enum.IntEnum):
    SUCCESS = 0
    FAILURE = 1
    LOCK_OUT_OF_DATE = 2
    IO_FAILURE = 3
    CONFIG_ERROR = 4
    INTERRUPTED = 130

    def __str__(self):
        return f"{self.name} ({self.value})"


@dataclass(frozen=True)
class LockingSettings:
    """Settings that control how locking is applied to a project.

    Attributes:
        lock_dir: Lock directory, relative to the project directory unless absolute.
        max_workers: Number of configurations resolved concurrently.
        freeze_mode: Compute the resolution mode once, before any configuration
            resolves, instead of reading the write trigger in every hook.
        validate_before_write: Validate against the existing lock even when
            locks are being written.
        retain_snapshots: Keep snapshots resolved in validate mode so that a
            write request later in the same build still persists them.
    """
    lock_dir: str = DEPENDENCY_LOCKING_FOLDER
    max_workers: int = DEFAULT_MAX_WORKERS
    freeze_mode: bool = False
    validate_before_write: bool = True
    retain_snapshots: bool = True

    def lock_root(self, project_dir) -> Path:
        lock_dir = Path(self.lock_dir)
        if lock_dir.is_absolute():
            return lock_dir
        return Path(project_dir) / lock_dir


_SETTING_TYPES = {f.name: f.type for f in fields(LockingSettings)}


def _coerce_setting(key: str, value: Any) -> Any:
    expected = _SETTING_TYPES[key]
    if expected in (bool, "bool"):
        if not isinstance(value, bool):
            raise ConfigurationError(
                f"Invalid value for setting '{key}'",
                parameter=key,
                expected="true or false",
                actual=value,
            )
        return value
    if expected in (int, "int"):
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ConfigurationError(
                f"Invalid value for setting '{key}'",
                parameter=key,
                expected="a positive integer",
                actual=value,
            )
        return value
    if not isinstance(value, (str, os.PathLike)) or not str(value):
        raise ConfigurationError(
            f"Invalid value for setting '{key}'",
            parameter=key,
            expected="a non-empty path",
            actual=value,
        )
    return str(value)


def settings_from_dict(values: Dict[str, Any]) -> LockingSettings:
    """Build settings from a mapping, rejecting unknown keys."""
    unknown = sorted(set(values) - set(_SETTING_TYPES))
    if unknown:
        raise ConfigurationError(
            f"Unknown settings: {', '.join(unknown)}",
            expected=sorted(_SETTING_TYPES),
            actual=unknown,
            code=ErrorCode.CONFIG_INVALID_VALUE,
        )
    return LockingSettings(**{k: _coerce_setting(k, v) for k, v in values.items()})


def load_settings(path: Optional[str] = None) -> LockingSettings:
    """Load settings from a YAML file.

    If ``path`` is None, the ``DEPLOCK_CONFIG`` environment variable and then
    ``deplock.yaml`` in the working directory are tried. A missing default
    file yields the default settings; a missing explicit file is an error.

    Raises:
        ConfigurationError: If the file is missing, unparsable or invalid.
    """
    explicit = path is not None or SETTINGS_FILE_ENV in os.environ
    settings_path = path or os.environ.get(SETTINGS_FILE_ENV) or DEFAULT_SETTINGS_FILE

    if not os.path.isfile(settings_path):
        if explicit:
            raise ConfigurationError(
                f"Settings file not found: {settings_path}",
                parameter="config_file",
                code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            )
        return LockingSettings()

    try:
        with open(settings_path, 'r', encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse settings file: {settings_path}",
            actual=str(e),
            code=ErrorCode.CONFIG_PARSE_ERROR,
        ) from e

    if raw is None:
        return LockingSettings()
    if not isinstance(raw, dict):
        raise ConfigurationError(
            f"Settings file must contain a mapping: {settings_path}",
            expected="mapping",
            actual=type(raw).__name__,
            code=ErrorCode.CONFIG_PARSE_ERROR,
        )
    return settings_from_dict(raw)


def apply_cli_overrides(settings: LockingSettings, args) -> LockingSettings:
    """Return settings with values given on the command line applied on top."""
    overrides = {}
    if getattr(args, "lock_dir", None):
        overrides["lock_dir"] = args.lock_dir
    if getattr(args, "jobs", None):
        overrides["max_workers"] = _coerce_setting("max_workers", args.jobs)
    if getattr(args, "freeze_mode", False):
        overrides["freeze_mode"] = True
    if getattr(args, "no_validate_before_write", False):
        overrides["validate_before_write"] = False
    return replace(settings, **overrides) if overrides else settings
