"""
deplock: dependency-lock consistency for build tool resolution pipelines.

Each resolvable configuration gets a lock file recording the module
versions it resolved to. Before resolution the recorded versions are added
as constraints; after resolution the result is validated against the lock,
or written to it when lock writing was requested for the build.
"""

VERSION = "0.3.0"

from deplock.errors import (  # noqa: E402
    DeplockException,
    LockOutOfDateException,
    IOFailure,
    MalformedLockEntryError,
    ConfigurationError,
)
from deplock.plugin import DependencyLockingPlugin, DependencyLockTask, LockingContext  # noqa: E402
from deplock.trigger import WriteTrigger, ResolutionMode  # noqa: E402

__all__ = [
    "VERSION",
    "DeplockException",
    "LockOutOfDateException",
    "IOFailure",
    "MalformedLockEntryError",
    "ConfigurationError",
    "DependencyLockingPlugin",
    "DependencyLockTask",
    "LockingContext",
    "WriteTrigger",
    "ResolutionMode",
]
