"""
Shared pytest fixtures for deplock tests.

These fixtures provide loggers, lock stores and stub collaborators that can
be used across all test modules.
"""

from pathlib import Path

import pytest

from deplock.lockfile import LockStore
from tests.fixtures import CollectingConstraints, MockLogger, SAMPLE_RESOLUTION_YAML


# =============================================================================
# Logger Fixtures
# =============================================================================

@pytest.fixture
def mock_logger():
    """
    Logger that captures messages per level.

    Usage:
        def test_something(mock_logger):
            some_function(logger=mock_logger)
            mock_logger.assert_logged('status', 'expected message')
    """
    return MockLogger()


# =============================================================================
# Lock Store Fixtures
# =============================================================================

@pytest.fixture
def lock_root(tmp_path) -> Path:
    """Lock directory that does not exist yet."""
    return tmp_path / "gradle" / "dependency-locks"


@pytest.fixture
def store(lock_root, mock_logger) -> LockStore:
    return LockStore(lock_root, logger=mock_logger)


@pytest.fixture
def constraints() -> CollectingConstraints:
    return CollectingConstraints()


@pytest.fixture
def resolution_file(tmp_path) -> Path:
    path = tmp_path / "resolution.yaml"
    path.write_text(SAMPLE_RESOLUTION_YAML, encoding="utf-8")
    return path
