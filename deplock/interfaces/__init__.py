"""
Interface definitions for deplock.

This package defines the abstract collaborators deplock consumes from the
host build tool. Concrete in-process implementations live in
``deplock.build``.
"""

from deplock.interfaces.resolution import (
    ModuleComponentIdentifier,
    ProjectComponentIdentifier,
    ComponentIdentifier,
    ResolvedComponent,
    ResolutionResult,
    ResolvableDependencies,
    ConstraintHandler,
    Configuration,
    ConfigurationContainer,
    Project,
)

__all__ = [
    'ModuleComponentIdentifier',
    'ProjectComponentIdentifier',
    'ComponentIdentifier',
    'ResolvedComponent',
    'ResolutionResult',
    'ResolvableDependencies',
    'ConstraintHandler',
    'Configuration',
    'ConfigurationContainer',
    'Project',
]
