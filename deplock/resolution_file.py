"""
Recorded resolution documents.

A resolution document captures what a build's resolution engine produced
for each configuration, so deplock can replay it through the locking
hooks. YAML and JSON are both accepted:

    configurations:
      compile:
        components:
          - org.example:lib:1.2
          - project: ":core"
      annotationProcessor:
        resolvable: false
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

import yaml

from deplock.build import DependencyConstraint, LocalProject
from deplock.errors import ConfigurationError, ErrorCode
from deplock.error_messages import format_error
from deplock.interfaces.resolution import (
    ModuleComponentIdentifier,
    ProjectComponentIdentifier,
    ResolutionResult,
    ResolvedComponent,
)


@dataclass
class RecordedConfiguration:
    name: str
    resolvable: bool = True
    components: Tuple[ResolvedComponent, ...] = field(default_factory=tuple)


@dataclass
class ResolutionDocument:
    path: str
    configurations: Dict[str, RecordedConfiguration] = field(default_factory=dict)

    def resolvable_names(self) -> List[str]:
        return sorted(name for name, c in self.configurations.items() if c.resolvable)

    def resolve(self, name: str, constraints: List[DependencyConstraint]) -> ResolutionResult:
        """Resolver for ``deplock.build.Build``; replays the recorded components."""
        return ResolutionResult(all_components=self.configurations[name].components)

    def create_configurations(self, project: LocalProject) -> None:
        for name in sorted(self.configurations):
            project.configurations.create(name, can_be_resolved=self.configurations[name].resolvable)


def _invalid(path: str, error: str) -> ConfigurationError:
    return ConfigurationError(
        format_error('RESOLUTION_FILE_INVALID', path=path, error=error),
        parameter="resolution_file",
        code=ErrorCode.CONFIG_PARSE_ERROR,
    )


def parse_component(raw: Any, path: str = "<memory>") -> ResolvedComponent:
    """Build a ResolvedComponent from ``group:module:version`` or ``{project: path}``."""
    if isinstance(raw, str):
        parts = raw.split(":")
        if len(parts) != 3 or not all(parts):
            raise _invalid(path, f"component '{raw}' is not group:module:version")
        group, module, version = parts
        return ResolvedComponent(ModuleComponentIdentifier(group, module, version))
    if isinstance(raw, dict) and set(raw) == {"project"} and isinstance(raw["project"], str):
        return ResolvedComponent(ProjectComponentIdentifier(raw["project"]))
    raise _invalid(path, f"unsupported component {raw!r}")


def parse_document(payload: Any, path: str = "<memory>") -> ResolutionDocument:
    if not isinstance(payload, dict) or not isinstance(payload.get("configurations"), dict):
        raise _invalid(path, "expected a mapping with a 'configurations' mapping")

    document = ResolutionDocument(path=path)
    for name, body in payload["configurations"].items():
        if not isinstance(name, str) or not name:
            raise _invalid(path, f"invalid configuration name {name!r}")
        body = body or {}
        if not isinstance(body, dict):
            raise _invalid(path, f"configuration '{name}' must be a mapping")
        resolvable = body.get("resolvable", True)
        if not isinstance(resolvable, bool):
            raise _invalid(path, f"configuration '{name}': 'resolvable' must be true or false")
        components = body.get("components") or []
        if not isinstance(components, list):
            raise _invalid(path, f"configuration '{name}': 'components' must be a list")
        document.configurations[name] = RecordedConfiguration(
            name=name,
            resolvable=resolvable,
            components=tuple(parse_component(c, path) for c in components),
        )
    return document


def load_document(path: str) -> ResolutionDocument:
    """Load a resolution document from a YAML or JSON file.

    Raises:
        ConfigurationError: If the file is missing or invalid.
    """
    if not os.path.isfile(path):
        raise ConfigurationError(
            format_error('RESOLUTION_FILE_NOT_FOUND', path=path),
            parameter="resolution_file",
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
        )
    try:
        with open(path, 'r', encoding="utf-8") as f:
            payload = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise _invalid(path, str(e)) from e
    return parse_document(payload, path)
