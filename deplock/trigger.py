"""
Write-trigger coordination between the lock task and resolution hooks.

A build starts in validate mode. The lock task flips a shared
``WriteTrigger`` exactly once; every post-resolution hook then asks a mode
source whether to validate or to write.

Mode sources:
    LiveMode: reads the trigger each time a hook runs. A configuration that
        resolved before the flip stays validated only, unless a
        ``PendingSnapshots`` retainer is wired in to persist it on the flip.
    FrozenMode: captures the trigger once, before resolution starts, so
        every configuration in the build sees the same mode no matter when
        the lock task runs.
    FixedMode: a mode chosen up front, independent of any trigger.
"""

import enum
import threading
from typing import Callable, Dict, List, Mapping, Optional


class ResolutionMode(enum.Enum):
    VALIDATE = "validate"
    WRITE = "write"

    def __str__(self):
        return self.value


class WriteTrigger:
    """Monotonic, thread-safe "write locks" flag for one build.

    ``request_write`` flips the flag from False to True at most once; later
    calls are no-ops. Listeners run once, on the thread that flipped it.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._requested = False
        self._listeners: List[Callable[[], None]] = []

    def request_write(self) -> bool:
        """Flip the flag. Returns True only for the call that flipped it."""
        with self._lock:
            if self._requested:
                return False
            self._requested = True
            listeners = list(self._listeners)
        for listener in listeners:
            listener()
        return True

    def should_write(self) -> bool:
        return self._requested

    def add_listener(self, listener: Callable[[], None]) -> None:
        """Register a callback run once when the flag flips."""
        with self._lock:
            self._listeners.append(listener)

    def freeze(self) -> ResolutionMode:
        return ResolutionMode.WRITE if self._requested else ResolutionMode.VALIDATE


class LiveMode:
    def __init__(self, trigger: WriteTrigger):
        self.trigger = trigger

    def current(self) -> ResolutionMode:
        return self.trigger.freeze()


class FixedMode:
    def __init__(self, mode: ResolutionMode):
        self.mode = mode

    def current(self) -> ResolutionMode:
        return self.mode


class FrozenMode:
    """Mode captured from a trigger once per build.

    ``freeze`` is meant to be called before any configuration resolves; if
    it was not, the first ``current`` call captures the mode instead.
    """

    def __init__(self, trigger: WriteTrigger):
        self.trigger = trigger
        self._lock = threading.Lock()
        self._mode: Optional[ResolutionMode] = None

    def freeze(self) -> ResolutionMode:
        with self._lock:
            if self._mode is None:
                self._mode = self.trigger.freeze()
            return self._mode

    @property
    def frozen(self) -> bool:
        return self._mode is not None

    def current(self) -> ResolutionMode:
        return self.freeze()


class PendingSnapshots:
    """Retain validate-mode snapshots until the trigger flips, then write them.

    The retainer lock makes "check trigger, then retain" atomic with respect
    to the flush, so a snapshot is either written directly or flushed, never
    lost.
    """

    def __init__(self, store, trigger: WriteTrigger, logger=None):
        self.store = store
        self.trigger = trigger
        self.logger = logger
        self._lock = threading.Lock()
        self._snapshots: Dict[str, Dict[str, str]] = {}
        trigger.add_listener(self.flush)

    def write_or_retain(self, configuration_name: str, snapshot: Mapping[str, str]) -> bool:
        """Write the snapshot if writing was requested, otherwise keep it.

        Returns:
            True if the lock file was written.
        """
        with self._lock:
            if not self.trigger.should_write():
                self._snapshots[configuration_name] = dict(snapshot)
                return False
        self.store.write(configuration_name, snapshot)
        return True

    def pending(self) -> List[str]:
        with self._lock:
            return sorted(self._snapshots)

    def flush(self) -> List[str]:
        """Write every retained snapshot. Returns the configuration names written.

        A snapshot is dropped only after its lock file is written, so a failed
        write leaves it and every later snapshot retained.
        """
        written = []
        while True:
            with self._lock:
                if not self._snapshots:
                    return written
                name = min(self._snapshots)
                snapshot = self._snapshots[name]
            if self.logger is not None:
                self.logger.verbose(f"Writing lock for already resolved configuration {name}")
            self.store.write(name, snapshot)
            with self._lock:
                del self._snapshots[name]
            written.append(name)
