"""
Tests for lock validation in deplock.lockfile.validator.

Tests cover:
- Agreement between lock and resolution
- Locked modules missing from the resolution
- Locked modules resolved to another version
- Full, non-raising comparison and its report
"""

import pytest

from deplock.errors import ErrorCode, LockOutOfDateException, MalformedLockEntryError
from deplock.lockfile.validator import (
    check_entry,
    compare_lock,
    format_validation_report,
    validate_lock,
)


SNAPSHOT = {"org.example:lib": "1.2", "org.slf4j:slf4j-api": "2.0.7"}


class TestCheckEntry:

    def test_match(self):
        result = check_entry("org.example:lib:1.2", SNAPSHOT)
        assert result.valid
        assert result.actual == "1.2"

    def test_missing(self):
        result = check_entry("a:b:1.0", SNAPSHOT)
        assert not result.valid
        assert result.missing
        assert "a:b:1.0" in result.message

    def test_drift(self):
        result = check_entry("org.example:lib:1.3", SNAPSHOT)
        assert not result.valid
        assert not result.missing
        assert result.expected == "1.3"
        assert result.actual == "1.2"

    def test_version_prefix_is_not_a_match(self):
        result = check_entry("org.example:lib:1.2", {"org.example:lib": "1.2.1"})
        assert not result.valid


class TestValidateLock:

    def test_agreement_passes(self):
        validate_lock("compile", ["org.example:lib:1.2", "org.slf4j:slf4j-api:2.0.7"], SNAPSHOT)

    def test_no_lock_passes(self):
        validate_lock("compile", [], SNAPSHOT)
        validate_lock("compile", [], {})

    def test_lock_subset_passes(self):
        validate_lock("compile", ["org.example:lib:1.2"], SNAPSHOT)

    def test_missing_module_raises(self):
        with pytest.raises(LockOutOfDateException) as exc_info:
            validate_lock("compile", ["a:b:1.0"], SNAPSHOT)
        exc = exc_info.value
        assert exc.code == ErrorCode.LOCK_MODULE_MISSING
        assert "a:b:1.0" in exc.message
        assert exc.context["configuration"] == "compile"

    def test_version_drift_names_both_versions(self):
        with pytest.raises(LockOutOfDateException) as exc_info:
            validate_lock("compile", ["a:b:1.0"], {"a:b": "2.0"})
        exc = exc_info.value
        assert exc.code == ErrorCode.LOCK_VERSION_MISMATCH
        assert "a:b:1.0" in exc.message
        assert "a:b:2.0" in exc.message
        assert exc.context["actual"] == "a:b:2.0"

    def test_stops_at_first_failure(self):
        with pytest.raises(LockOutOfDateException) as exc_info:
            validate_lock("compile", ["x:y:1", "a:b:1.0"], {"a:b": "2.0"})
        assert exc_info.value.code == ErrorCode.LOCK_MODULE_MISSING

    def test_malformed_line_raises(self):
        with pytest.raises(MalformedLockEntryError):
            validate_lock("compile", ["garbage"], SNAPSHOT)


class TestCompareLock:

    def test_reports_every_entry(self):
        result = compare_lock(
            "compile",
            ["org.example:lib:1.3", "gone:module:1.0", "org.slf4j:slf4j-api:2.0.7"],
            SNAPSHOT,
        )
        assert len(result.results) == 3
        assert (result.matched, result.mismatched, result.missing) == (1, 1, 1)
        assert not result.valid

    def test_unlocked_modules(self):
        result = compare_lock("compile", ["org.example:lib:1.2"], SNAPSHOT)
        assert result.valid
        assert result.unlocked_modules == ["org.slf4j:slf4j-api:2.0.7"]

    def test_unlocked_modules_empty_without_lock(self):
        result = compare_lock("compile", [], SNAPSHOT, locked=False)
        assert result.unlocked_modules == []
        assert result.valid


class TestFormatValidationReport:

    def test_report_for_drift(self):
        result = compare_lock("compile", ["org.example:lib:1.3"], SNAPSHOT)
        report = format_validation_report(result)
        assert report.startswith("Lock validation: compile")
        assert "Mismatched: 1" in report
        assert "org.example:lib:1.3" in report
        assert "+ org.slf4j:slf4j-api:2.0.7" in report
        assert report.endswith("compile: lock out of date: 1 version mismatch(es)")

    def test_report_without_lock(self):
        report = format_validation_report(compare_lock("compile", [], SNAPSHOT, locked=False))
        assert "No lock file recorded" in report
