"""
Integration tests for the dependency locking flow.

These tests apply the plugin to an in-process project and resolve
configurations through Build, the way the resolve command does, covering:
- Constraining and validating against an existing lock
- Writing locks for many configurations concurrently
- A write request arriving after some configurations resolved
- Frozen mode ignoring a late write request
"""

import threading

import pytest

from deplock.build import Build, LocalProject
from deplock.config import LOCK_CONSTRAINT_REASON, LockingSettings
from deplock.errors import ErrorCode, LockOutOfDateException
from deplock.plugin import DependencyLockingPlugin
from tests.fixtures import resolution


class Resolver:
    """Resolver returning fixed results and recording the constraints it saw."""

    def __init__(self, results):
        self.results = results
        self.seen = {}
        self._lock = threading.Lock()

    def __call__(self, name, constraints):
        with self._lock:
            self.seen[name] = [(c.notation, c.reason) for c in constraints]
        return self.results[name]


def _setup(tmp_path, mock_logger, names, **settings):
    project = LocalProject(tmp_path)
    context = DependencyLockingPlugin(LockingSettings(**settings), mock_logger).apply(project)
    for name in names:
        project.configurations.create(name)
    return project, context


class TestLockedConfiguration:
    """compile is locked at org.example:lib:1.2."""

    @pytest.fixture
    def locked(self, tmp_path, mock_logger):
        project, context = _setup(tmp_path, mock_logger, ["compile"])
        context.store.write("compile", {"org.example:lib": "1.2"})
        return project, context

    def test_matching_resolution_succeeds_without_write(self, locked, mock_logger):
        project, context = locked
        path = context.store.path_for("compile")
        before = path.stat().st_mtime_ns
        resolver = Resolver({"compile": resolution("org.example:lib:1.2")})

        context.start_build()
        result = Build(project, resolver, mock_logger).resolve_all()

        assert result.success
        assert resolver.seen["compile"] == [("org.example:lib:1.2", LOCK_CONSTRAINT_REASON)]
        assert path.stat().st_mtime_ns == before
        assert context.pending.pending() == ["compile"]

    def test_drifted_resolution_fails(self, locked, mock_logger):
        project, context = locked
        resolver = Resolver({"compile": resolution("org.example:lib:1.3")})

        context.start_build()
        result = Build(project, resolver, mock_logger).resolve_all()

        assert not result.success
        failure = result.first_failure()
        assert isinstance(failure, LockOutOfDateException)
        assert failure.code == ErrorCode.LOCK_VERSION_MISMATCH
        assert "1.2" in failure.message
        assert "1.3" in failure.message
        assert context.store.read("compile") == ["org.example:lib:1.2"]

    def test_dropped_module_fails(self, locked, mock_logger):
        project, context = locked
        resolver = Resolver({"compile": resolution("org.other:lib:1.0")})

        result = Build(project, resolver, mock_logger).resolve_all()

        assert result.first_failure().code == ErrorCode.LOCK_MODULE_MISSING


class TestWritingLocks:

    def test_concurrent_writes(self, tmp_path, mock_logger):
        names = [f"conf{i:02d}" for i in range(12)]
        project, context = _setup(tmp_path, mock_logger, names)
        results = {name: resolution(f"org.example:{name}:1.{i}", "org.shared:core:2.0")
                   for i, name in enumerate(names)}

        context.lock_task.run()
        context.start_build()
        result = Build(project, Resolver(results), mock_logger, max_workers=6).resolve_all()

        assert result.success
        assert context.store.configurations() == names
        for i, name in enumerate(names):
            assert context.store.read(name) == [f"org.example:{name}:1.{i}", "org.shared:core:2.0"]
        assert sorted(p.name for p in context.store.root.iterdir()) == [f"{n}.lockfile" for n in names]

    def test_second_build_validates_written_locks(self, tmp_path, mock_logger):
        results = {"compile": resolution("a:b:1.0"), "runtime": resolution("a:b:1.0", "c:d:2.0")}

        project, context = _setup(tmp_path, mock_logger, sorted(results))
        context.lock_task.run()
        Build(project, Resolver(results), mock_logger).resolve_all()

        project, context = _setup(tmp_path, mock_logger, sorted(results))
        resolver = Resolver(results)
        assert Build(project, resolver, mock_logger).resolve_all().success
        assert resolver.seen["runtime"] == [
            ("a:b:1.0", LOCK_CONSTRAINT_REASON),
            ("c:d:2.0", LOCK_CONSTRAINT_REASON),
        ]


class TestLateWriteRequest:

    def _build_with_late_request(self, tmp_path, mock_logger, **settings):
        project, context = _setup(tmp_path, mock_logger, ["compile", "runtime"], **settings)
        results = {"compile": resolution("a:b:1.0"), "runtime": resolution("c:d:2.0")}
        context.start_build()
        build = Build(project, Resolver(results), mock_logger)

        build.resolve("compile")
        context.lock_task.run()
        build.resolve("runtime")
        return context

    def test_retained_snapshot_is_written(self, tmp_path, mock_logger):
        context = self._build_with_late_request(tmp_path, mock_logger)
        assert context.store.read("compile") == ["a:b:1.0"]
        assert context.store.read("runtime") == ["c:d:2.0"]

    def test_without_retainer_only_later_configurations_written(self, tmp_path, mock_logger):
        context = self._build_with_late_request(tmp_path, mock_logger, retain_snapshots=False)
        assert not context.store.exists("compile")
        assert context.store.read("runtime") == ["c:d:2.0"]

    def test_frozen_mode_writes_nothing(self, tmp_path, mock_logger):
        context = self._build_with_late_request(tmp_path, mock_logger, freeze_mode=True)
        assert context.store.configurations() == []
        assert not context.store.root.exists()
