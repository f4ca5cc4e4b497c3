"""
In-process build host.

Implements the ``deplock.interfaces`` collaborators so the locking protocol
can run without an external build tool: configurations hold their hook
registrations, a resolver callable produces each ResolutionResult, and
``Build`` resolves configurations concurrently on a thread pool.

Each configuration moves through NotStarted -> PreResolve -> Resolving ->
PostResolve -> Done exactly once per build.
"""

import enum
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional

from deplock.config import DEFAULT_MAX_WORKERS
from deplock.errors import ConfigurationError, DeplockException, ErrorCode
from deplock.interfaces.resolution import (
    Configuration,
    ConfigurationContainer,
    ConstraintHandler,
    Project,
    ResolutionResult,
    ResolvableDependencies,
)
from deplock.lockfile.codec import split_entry


class ResolutionState(enum.Enum):
    NOT_STARTED = "not_started"
    PRE_RESOLVE = "pre_resolve"
    RESOLVING = "resolving"
    POST_RESOLVE = "post_resolve"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class DependencyConstraint:
    """A hard version constraint added to a configuration."""
    configuration: str
    module: str
    version: str
    reason: Optional[str] = None

    @property
    def notation(self) -> str:
        return f"{self.module}:{self.version}"


class RecordingConstraintHandler(ConstraintHandler):
    """Constraint API that records constraints per configuration."""

    def __init__(self):
        self._lock = threading.Lock()
        self._constraints: Dict[str, List[DependencyConstraint]] = {}

    def add(self, configuration_name: str, notation: str, reason: Optional[str] = None) -> None:
        module, version = split_entry(notation)
        constraint = DependencyConstraint(configuration_name, module, version, reason)
        with self._lock:
            self._constraints.setdefault(configuration_name, []).append(constraint)

    def for_configuration(self, configuration_name: str) -> List[DependencyConstraint]:
        with self._lock:
            return list(self._constraints.get(configuration_name, []))


Resolver = Callable[[str, List[DependencyConstraint]], ResolutionResult]


class LocalResolvableDependencies(ResolvableDependencies):

    def __init__(self, name: str):
        self._name = name
        self._before: List[Callable] = []
        self._after: List[Callable] = []
        self._result: Optional[ResolutionResult] = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def resolution_result(self) -> ResolutionResult:
        if self._result is None:
            raise ConfigurationError(
                f"Configuration '{self._name}' has not been resolved",
                parameter="configuration",
                actual=self._name,
            )
        return self._result

    def before_resolve(self, action) -> None:
        self._before.append(action)

    def after_resolve(self, action) -> None:
        self._after.append(action)


class LocalConfiguration(Configuration):

    def __init__(self, name: str, can_be_resolved: bool = True):
        self._name = name
        self._can_be_resolved = can_be_resolved
        self._incoming = LocalResolvableDependencies(name)
        self._state_lock = threading.Lock()
        self.state = ResolutionState.NOT_STARTED

    def __repr__(self):
        return f"LocalConfiguration({self._name!r}, state={self.state.value})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def can_be_resolved(self) -> bool:
        return self._can_be_resolved

    @property
    def incoming(self) -> LocalResolvableDependencies:
        return self._incoming

    def resolve(self, resolver: Resolver, constraints: RecordingConstraintHandler) -> ResolutionResult:
        """Run before actions, the resolver, then after actions.

        Raises:
            ConfigurationError: If the configuration cannot be resolved or
                was already resolved in this build.
        """
        with self._state_lock:
            if not self._can_be_resolved:
                raise ConfigurationError(
                    f"Configuration '{self._name}' cannot be resolved",
                    parameter="configuration",
                    actual=self._name,
                )
            if self.state is not ResolutionState.NOT_STARTED:
                raise ConfigurationError(
                    f"Configuration '{self._name}' was already resolved in this build",
                    parameter="configuration",
                    actual=self.state.value,
                    code=ErrorCode.CONFIG_ALREADY_RESOLVED,
                )
            self.state = ResolutionState.PRE_RESOLVE

        incoming = self._incoming
        try:
            for action in incoming._before:
                action(incoming)
            self.state = ResolutionState.RESOLVING
            incoming._result = resolver(self._name, constraints.for_configuration(self._name))
            self.state = ResolutionState.POST_RESOLVE
            for action in incoming._after:
                action(incoming)
        except BaseException:
            self.state = ResolutionState.FAILED
            raise
        self.state = ResolutionState.DONE
        return incoming._result


class LocalConfigurationContainer(ConfigurationContainer):

    def __init__(self):
        self._lock = threading.Lock()
        self._configurations: Dict[str, LocalConfiguration] = {}
        self._actions: List[Callable] = []

    def __iter__(self):
        with self._lock:
            return iter(list(self._configurations.values()))

    def __len__(self):
        return len(self._configurations)

    def get(self, name: str) -> LocalConfiguration:
        try:
            return self._configurations[name]
        except KeyError:
            raise ConfigurationError(
                f"Unknown configuration: {name}",
                parameter="configuration",
                expected=sorted(self._configurations),
                actual=name,
            ) from None

    def create(self, name: str, can_be_resolved: bool = True) -> LocalConfiguration:
        with self._lock:
            if name in self._configurations:
                raise ConfigurationError(
                    f"Configuration '{name}' already exists",
                    parameter="configuration",
                    actual=name,
                )
            configuration = LocalConfiguration(name, can_be_resolved)
            self._configurations[name] = configuration
            actions = list(self._actions)
        for action in actions:
            action(configuration)
        return configuration

    def all(self, action) -> None:
        with self._lock:
            self._actions.append(action)
            existing = list(self._configurations.values())
        for configuration in existing:
            action(configuration)


class LocalProject(Project):

    def __init__(self, project_dir, constraints: Optional[RecordingConstraintHandler] = None):
        self._project_dir = Path(project_dir)
        self._configurations = LocalConfigurationContainer()
        self._constraints = constraints or RecordingConstraintHandler()

    @property
    def project_dir(self) -> Path:
        return self._project_dir

    @property
    def configurations(self) -> LocalConfigurationContainer:
        return self._configurations

    @property
    def constraints(self) -> RecordingConstraintHandler:
        return self._constraints


@dataclass
class BuildResult:
    """Outcome of resolving a set of configurations."""
    resolved: List[str] = field(default_factory=list)
    failures: Dict[str, DeplockException] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.failures

    def first_failure(self) -> Optional[DeplockException]:
        if not self.failures:
            return None
        return self.failures[sorted(self.failures)[0]]


class Build:
    """
    Resolve a project's configurations through the registered hooks.

    Args:
        project: LocalProject with the locking plugin applied.
        resolver: Callable returning the ResolutionResult of a configuration.
        logger: Injected logger.
        max_workers: Number of configurations resolved concurrently.
    """

    def __init__(self, project: LocalProject, resolver: Resolver, logger,
                 max_workers: int = DEFAULT_MAX_WORKERS):
        self.project = project
        self.resolver = resolver
        self.logger = logger
        self.max_workers = max_workers

    def resolve(self, name: str) -> ResolutionResult:
        configuration = self.project.configurations.get(name)
        self.logger.verboser(f"Resolving configuration {name}")
        return configuration.resolve(self.resolver, self.project.constraints)

    def resolve_all(self, names: Optional[List[str]] = None, on_done: Optional[Callable] = None) -> BuildResult:
        """Resolve configurations in parallel and collect failures.

        Only DeplockException failures are collected; anything else
        propagates.

        Args:
            names: Configurations to resolve; defaults to every resolvable one.
            on_done: Optional callback invoked with each configuration name
                once it finished, successfully or not.
        """
        if names is None:
            names = [c.name for c in self.project.configurations if c.can_be_resolved]
        result = BuildResult()
        if not names:
            return result

        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(names))) as executor:
            future_to_name = {executor.submit(self.resolve, name): name for name in names}

            for future in as_completed(future_to_name):
                name = future_to_name[future]
                try:
                    future.result()
                    result.resolved.append(name)
                except DeplockException as e:
                    self.logger.error(f"Resolution of {name} failed: {e.message}")
                    result.failures[name] = e
                finally:
                    if on_done is not None:
                        on_done(name)

        result.resolved.sort()
        return result
