"""
Validation of a resolution snapshot against recorded lock entries.

``validate_lock`` raises on the first out-of-date entry and is what the
post-resolution hook uses. ``compare_lock`` checks every entry without
raising and backs the ``deplock verify`` report.
"""

from typing import Iterable, Mapping

from deplock.errors import ErrorCode, LockOutOfDateException
from deplock.error_messages import format_error
from deplock.lockfile.codec import join_entry, split_entry
from deplock.lockfile.models import EntryResult, LockValidationResult


def check_entry(line: str, snapshot: Mapping[str, str]) -> EntryResult:
    """Check one recorded lock line against a resolution snapshot.

    Args:
        line: Lock line, ``group:name:version``.
        snapshot: Resolved ``group:name -> version``.

    Raises:
        MalformedLockEntryError: If the line cannot be split.
    """
    module, expected = split_entry(line)
    actual = snapshot.get(module)
    if actual is None:
        return EntryResult(
            entry=line,
            module=module,
            expected=expected,
            actual=None,
            valid=False,
            message=format_error('LOCK_MODULE_MISSING', expected=line),
        )
    if actual != expected:
        return EntryResult(
            entry=line,
            module=module,
            expected=expected,
            actual=actual,
            valid=False,
            message=format_error('LOCK_VERSION_MISMATCH', expected=line, actual=join_entry(module, actual)),
        )
    return EntryResult(
        entry=line,
        module=module,
        expected=expected,
        actual=actual,
        valid=True,
        message=f"{module}: {actual} matches lock",
    )


def validate_lock(configuration: str, lines: Iterable[str], snapshot: Mapping[str, str]) -> None:
    """Raise if any recorded entry no longer matches the resolution.

    An empty ``lines`` (no lock recorded) always passes.

    Raises:
        LockOutOfDateException: On the first missing or drifted module.
        MalformedLockEntryError: If a line cannot be split.
    """
    for line in lines:
        result = check_entry(line, snapshot)
        if result.valid:
            continue
        if result.missing:
            raise LockOutOfDateException(
                result.message,
                configuration=configuration,
                expected=line,
                code=ErrorCode.LOCK_MODULE_MISSING,
            )
        raise LockOutOfDateException(
            result.message,
            configuration=configuration,
            expected=line,
            actual=join_entry(result.module, result.actual),
            code=ErrorCode.LOCK_VERSION_MISMATCH,
        )


def compare_lock(configuration: str, lines: Iterable[str], snapshot: Mapping[str, str],
                 locked: bool = True) -> LockValidationResult:
    """Check every recorded entry and report all differences.

    Args:
        configuration: Configuration name, used in the report.
        lines: Recorded lock lines.
        snapshot: Resolved ``group:name -> version``.
        locked: Whether a lock file existed at all.

    Returns:
        LockValidationResult with one EntryResult per lock line and the
        resolved modules the lock does not mention.
    """
    result = LockValidationResult(configuration=configuration, locked=locked)
    seen = set()
    for line in lines:
        entry_result = check_entry(line, snapshot)
        seen.add(entry_result.module)
        result.results.append(entry_result)
    if locked:
        result.unlocked_modules = sorted(join_entry(m, v) for m, v in snapshot.items() if m not in seen)
    return result


def format_validation_report(result: LockValidationResult) -> str:
    """Format a LockValidationResult as a multi-line report."""
    lines = [
        f"Lock validation: {result.configuration}",
        "=" * 60,
    ]
    if not result.locked:
        lines.append("No lock file recorded; nothing to validate.")
        return "\n".join(lines)

    lines.append(f"Locked modules: {len(result.results)}")
    lines.append(f"  Matched:    {result.matched}")
    lines.append(f"  Mismatched: {result.mismatched}")
    lines.append(f"  Missing:    {result.missing}")

    failures = [r for r in result.results if not r.valid]
    if failures:
        lines.append("")
        lines.append("Out of date:")
        for r in failures:
            lines.append(f"  - {r.message}")

    if result.unlocked_modules:
        lines.append("")
        lines.append("Resolved but not locked:")
        for entry in result.unlocked_modules:
            lines.append(f"  + {entry}")

    lines.append("")
    lines.append(result.summary)
    return "\n".join(lines)
