"""
Before- and after-resolution actions registered on every resolvable
configuration.

BeforeResolveAction pins a configuration to its recorded versions by
adding one constraint per lock entry. AfterResolveAction reduces the
resolution to ``group:name -> version``, validates it against the lock and,
in write mode, replaces the lock with it.
"""

from typing import Dict

from deplock.config import LOCK_CONSTRAINT_REASON
from deplock.interfaces.resolution import ModuleComponentIdentifier, ResolutionResult
from deplock.lockfile.codec import split_entry
from deplock.lockfile.models import ModuleCoordinate
from deplock.lockfile.validator import validate_lock
from deplock.trigger import ResolutionMode


def resolved_modules(result: ResolutionResult) -> Dict[str, str]:
    """Reduce a resolution to ``group:name -> version``.

    Project components are skipped. If a module is reported more than once,
    the last report wins. Raises ValueError for a group or name containing
    the entry separator.
    """
    modules = {}
    for component in result.all_components:
        identifier = component.id
        if isinstance(identifier, ModuleComponentIdentifier):
            coordinate = ModuleCoordinate(identifier.group, identifier.module)
            modules[str(coordinate)] = identifier.version
    return modules


class BeforeResolveAction:
    """Add every recorded lock entry as a constraint on the configuration."""

    def __init__(self, store, constraints, logger):
        self.store = store
        self.constraints = constraints
        self.logger = logger

    def __call__(self, dependencies) -> None:
        name = dependencies.name
        self.logger.debug(f"Pre resolve hook for {name}")
        lines = self.store.read(name)
        if not lines:
            return

        # Reject the whole lock before constraining anything
        for line in lines:
            split_entry(line)

        for line in lines:
            self.constraints.add(name, line, reason=LOCK_CONSTRAINT_REASON)
        self.logger.verbose(f"Constrained {name} with {len(lines)} locked module(s)")


class AfterResolveAction:
    """Validate a completed resolution against the lock, and write it in write mode.

    Args:
        store: LockStore holding the configuration's lock file.
        mode_source: Object with ``current() -> ResolutionMode``.
        logger: Injected logger.
        pending: Optional PendingSnapshots; when given, validate-mode
            snapshots are retained and written if writing is requested later.
        validate_before_write: Validate against the existing lock in write
            mode as well.
    """

    def __init__(self, store, mode_source, logger, pending=None, validate_before_write=True):
        self.store = store
        self.mode_source = mode_source
        self.logger = logger
        self.pending = pending
        self.validate_before_write = validate_before_write

    def __call__(self, dependencies) -> None:
        name = dependencies.name
        self.logger.debug(f"Post resolve hook for {name}")
        modules = resolved_modules(dependencies.resolution_result)
        self.logger.ridiculous(f"Resolved modules for {name}: {modules}")

        mode = self.mode_source.current()
        if mode is ResolutionMode.VALIDATE or self.validate_before_write:
            lines = self.store.read(name)
            validate_lock(name, lines, modules)
            if lines:
                self.logger.verbose(f"Lock for {name} is up to date ({len(lines)} module(s))")

        if self.pending is not None:
            written = self.pending.write_or_retain(name, modules)
        elif mode is ResolutionMode.WRITE:
            self.store.write(name, modules)
            written = True
        else:
            written = False

        if written:
            self.logger.status(f"Wrote lock for {name} ({len(modules)} module(s))")
