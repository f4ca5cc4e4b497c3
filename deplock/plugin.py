"""
Dependency locking plugin.

Applying the plugin to a project fixes the lock directory, creates the
build's write trigger and registers the before/after resolution actions on
every configuration that can be resolved, including configurations added
after the plugin was applied.
"""

from dataclasses import dataclass
from typing import Optional

from deplock.config import LockingSettings
from deplock.hooks import AfterResolveAction, BeforeResolveAction
from deplock.lockfile.store import LockStore
from deplock.trigger import FrozenMode, LiveMode, PendingSnapshots, WriteTrigger


class DependencyLockTask:
    """User-invokable action that switches the build to writing lock files."""

    name = "dependencyLock"

    def __init__(self, trigger: WriteTrigger, logger=None):
        self.trigger = trigger
        self.logger = logger

    def run(self) -> bool:
        """Request lock writing. Returns True if this call enabled it."""
        flipped = self.trigger.request_write()
        if self.logger is not None:
            if flipped:
                self.logger.status("Lock files will be written for resolved configurations")
            else:
                self.logger.debug("Lock writing was already requested")
        return flipped


@dataclass
class LockingContext:
    """Per-build locking state created by ``DependencyLockingPlugin.apply``."""
    store: LockStore
    trigger: WriteTrigger
    mode_source: object
    lock_task: DependencyLockTask
    pending: Optional[PendingSnapshots] = None

    def start_build(self) -> None:
        """Call once before any configuration resolves."""
        if isinstance(self.mode_source, FrozenMode):
            self.mode_source.freeze()


class DependencyLockingPlugin:
    """
    Apply dependency locking to a ``deplock.interfaces.Project``.

    Args:
        settings: LockingSettings for this build.
        logger: Injected logger passed on to every action.
    """

    def __init__(self, settings: LockingSettings, logger):
        self.settings = settings
        self.logger = logger

    def apply(self, project, trigger: Optional[WriteTrigger] = None) -> LockingContext:
        self.logger.debug("Applying dependency-locking plugin")
        store = LockStore(self.settings.lock_root(project.project_dir), logger=self.logger)
        trigger = trigger or WriteTrigger()

        pending = None
        if self.settings.freeze_mode:
            mode_source = FrozenMode(trigger)
        else:
            mode_source = LiveMode(trigger)
            if self.settings.retain_snapshots:
                pending = PendingSnapshots(store, trigger, logger=self.logger)

        before = BeforeResolveAction(store, project.constraints, self.logger)
        after = AfterResolveAction(
            store,
            mode_source,
            self.logger,
            pending=pending,
            validate_before_write=self.settings.validate_before_write,
        )

        def register(configuration):
            if not configuration.can_be_resolved:
                return
            self.logger.debug(f"Adding hook to configuration {configuration.name}")
            configuration.incoming.before_resolve(before)
            configuration.incoming.after_resolve(after)

        project.configurations.all(register)

        return LockingContext(
            store=store,
            trigger=trigger,
            mode_source=mode_source,
            lock_task=DependencyLockTask(trigger, logger=self.logger),
            pending=pending,
        )
