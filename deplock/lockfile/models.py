"""
Data classes for lock entries and validation results.
"""

from dataclasses import dataclass, field
from functools import total_ordering
from typing import List, Optional

from deplock.lockfile.codec import SEPARATOR, join_entry, split_entry


@total_ordering
@dataclass(frozen=True)
class ModuleCoordinate:
    """A dependency identified by group and name, irrespective of version."""
    group: str
    name: str

    def __post_init__(self):
        for part in (self.group, self.name):
            if SEPARATOR in part:
                raise ValueError(f"Module coordinate part must not contain '{SEPARATOR}': {part!r}")

    def __str__(self) -> str:
        return f"{self.group}{SEPARATOR}{self.name}"

    def __lt__(self, other):
        if not isinstance(other, ModuleCoordinate):
            return NotImplemented
        return str(self) < str(other)


@dataclass(frozen=True)
class LockEntry:
    """One recorded ``module:version`` line of a lock file."""
    module: str
    version: str

    @classmethod
    def parse(cls, line: str) -> "LockEntry":
        module, version = split_entry(line)
        return cls(module=module, version=version)

    @property
    def notation(self) -> str:
        return join_entry(self.module, self.version)

    def __str__(self) -> str:
        return self.notation


@dataclass
class EntryResult:
    """Outcome of checking one lock entry against a resolution."""
    entry: str                  # Lock line as recorded
    module: str
    expected: str               # Recorded version
    actual: Optional[str]       # Resolved version, None if no longer resolved
    valid: bool
    message: str

    @property
    def missing(self) -> bool:
        return self.actual is None


@dataclass
class LockValidationResult:
    """Result of comparing one configuration's lock with its resolution."""
    configuration: str
    locked: bool                            # False if no lock file existed
    results: List[EntryResult] = field(default_factory=list)
    unlocked_modules: List[str] = field(default_factory=list)  # Resolved module:version not in the lock

    @property
    def matched(self) -> int:
        return sum(1 for r in self.results if r.valid)

    @property
    def mismatched(self) -> int:
        return sum(1 for r in self.results if not r.valid and not r.missing)

    @property
    def missing(self) -> int:
        return sum(1 for r in self.results if r.missing)

    @property
    def valid(self) -> bool:
        return all(r.valid for r in self.results)

    @property
    def summary(self) -> str:
        if not self.locked:
            return f"{self.configuration}: no lock file"
        if self.valid:
            return f"{self.configuration}: all {self.matched} locked modules match"
        issues = []
        if self.mismatched:
            issues.append(f"{self.mismatched} version mismatch(es)")
        if self.missing:
            issues.append(f"{self.missing} missing module(s)")
        return f"{self.configuration}: lock out of date: {', '.join(issues)}"
