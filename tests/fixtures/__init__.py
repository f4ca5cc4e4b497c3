"""
Test fixtures package for deplock tests.

This package provides reusable mock classes and sample data
for testing the lock store, hooks and plugin.
"""

from tests.fixtures.mock_logger import MockLogger, create_mock_logger
from tests.fixtures.sample_data import (
    SAMPLE_LOCK_TEXT,
    SAMPLE_RESOLUTION_YAML,
    CollectingConstraints,
    StubDependencies,
    module,
    project,
    resolution,
)

__all__ = [
    # Mock classes
    'MockLogger',
    'create_mock_logger',
    'CollectingConstraints',
    'StubDependencies',
    # Sample data
    'SAMPLE_LOCK_TEXT',
    'SAMPLE_RESOLUTION_YAML',
    'module',
    'project',
    'resolution',
]
