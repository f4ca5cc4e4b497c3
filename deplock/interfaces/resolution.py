"""
Interfaces to the host build tool's resolution pipeline.

deplock does not resolve dependencies. It hooks into a resolution engine
at two points per configuration and injects constraints through the host's
constraint API. This module defines those collaborators:

- Component identities: a tagged union of module-backed and project
  components. Only module-backed components take part in locking.
- ResolvableDependencies: the per-configuration hook registration point
  and, after resolution, the ResolutionResult.
- ConstraintHandler: accepts version constraints for a configuration.
- Configuration / ConfigurationContainer / Project: what the plugin is
  applied to.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, Optional, Tuple, Union


@dataclass(frozen=True)
class ModuleComponentIdentifier:
    """A component that came from a module repository: group, module, version."""
    group: str
    module: str
    version: str

    @property
    def display_name(self) -> str:
        return f"{self.group}:{self.module}:{self.version}"


@dataclass(frozen=True)
class ProjectComponentIdentifier:
    """A component built by the project itself; never locked."""
    project_path: str

    @property
    def display_name(self) -> str:
        return f"project {self.project_path}"


ComponentIdentifier = Union[ModuleComponentIdentifier, ProjectComponentIdentifier]


@dataclass(frozen=True)
class ResolvedComponent:
    id: ComponentIdentifier


@dataclass(frozen=True)
class ResolutionResult:
    """All components of one configuration's completed resolution."""
    all_components: Tuple[ResolvedComponent, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[ResolvedComponent]:
        return iter(self.all_components)


DependenciesAction = Callable[["ResolvableDependencies"], None]


class ResolvableDependencies(ABC):
    """Incoming dependencies of one configuration.

    ``before_resolve`` actions run before the engine resolves the
    configuration, ``after_resolve`` actions after it, in registration
    order, on the thread doing the resolution.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def resolution_result(self) -> ResolutionResult:
        """Available once resolution has completed."""
        pass

    @abstractmethod
    def before_resolve(self, action: DependenciesAction) -> None:
        pass

    @abstractmethod
    def after_resolve(self, action: DependenciesAction) -> None:
        pass


class ConstraintHandler(ABC):
    """Host API for adding version constraints to a configuration."""

    @abstractmethod
    def add(self, configuration_name: str, notation: str, reason: Optional[str] = None) -> None:
        """Constrain ``configuration_name`` with a ``group:name:version`` notation."""
        pass


class Configuration(ABC):

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def can_be_resolved(self) -> bool:
        pass

    @property
    @abstractmethod
    def incoming(self) -> ResolvableDependencies:
        pass


class ConfigurationContainer(ABC):

    @abstractmethod
    def all(self, action: Callable[[Configuration], None]) -> None:
        """Run ``action`` for every current configuration and every one added later."""
        pass


class Project(ABC):

    @property
    @abstractmethod
    def project_dir(self) -> Path:
        pass

    @property
    @abstractmethod
    def configurations(self) -> ConfigurationContainer:
        pass

    @property
    @abstractmethod
    def constraints(self) -> ConstraintHandler:
        pass
