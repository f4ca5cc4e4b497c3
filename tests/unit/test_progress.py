"""
Tests for progress indication in deplock.progress.

Tests cover:
- TTY detection
- progress_context when output is not a terminal
- progress_context with a Rich progress bar
- Cleanup when resolution raises inside the context
"""

import pytest
from unittest.mock import MagicMock, PropertyMock, patch

from deplock.errors import LockOutOfDateException
from deplock.progress import is_interactive_terminal, progress_context


@pytest.fixture
def rich_progress():
    """Pretend to be on a terminal and capture the Progress instance."""
    with patch("deplock.progress.is_interactive_terminal", return_value=True):
        with patch("deplock.progress.Progress") as MockProgress:
            progress = MagicMock()
            progress.add_task.return_value = 0
            MockProgress.return_value = progress
            yield MockProgress, progress


class TestIsInteractiveTerminal:

    @pytest.mark.parametrize("is_terminal", [True, False])
    def test_follows_console(self, is_terminal):
        with patch("deplock.progress.Console") as MockConsole:
            console = MagicMock()
            type(console).is_terminal = PropertyMock(return_value=is_terminal)
            MockConsole.return_value = console
            assert is_interactive_terminal() is is_terminal


class TestProgressContextNonInteractive:

    def test_logs_status(self):
        logger = MagicMock()
        with patch("deplock.progress.is_interactive_terminal", return_value=False):
            with progress_context("Resolving 3 configuration(s)", total=3, logger=logger):
                pass
        logger.status.assert_called_once_with("Resolving 3 configuration(s)...")

    def test_noop_functions_without_logger(self):
        with patch("deplock.progress.is_interactive_terminal", return_value=False):
            with progress_context("Resolving") as (update, set_desc):
                update()
                update(completed=2)
                set_desc("Writing locks")


class TestProgressContextInteractive:

    def test_spinner_without_total(self, rich_progress):
        MockProgress, progress = rich_progress
        with progress_context("Resolving"):
            pass
        MockProgress.assert_called_once()
        progress.start.assert_called_once()
        progress.stop.assert_called_once()
        assert progress.add_task.call_args[1]["total"] is None

    def test_bar_with_total(self, rich_progress):
        MockProgress, progress = rich_progress
        with progress_context("Resolving", total=4):
            pass
        assert progress.add_task.call_args[1]["total"] == 4
        # Spinner, description, bar, M/N and elapsed
        assert len(MockProgress.call_args[0]) == 5

    def test_update_advances_once_per_configuration(self, rich_progress):
        _, progress = rich_progress
        with progress_context("Resolving", total=2) as (update, _):
            for _name in ("compile", "runtime"):
                update()
        advances = [c[1].get("advance") for c in progress.update.call_args_list]
        assert advances == [1, 1]

    def test_update_sets_completed(self, rich_progress):
        _, progress = rich_progress
        with progress_context("Resolving", total=2) as (update, _):
            update(completed=2)
        assert progress.update.call_args[1] == {"completed": 2}

    def test_set_description(self, rich_progress):
        _, progress = rich_progress
        with progress_context("Resolving") as (_, set_desc):
            set_desc("Writing locks")
        assert progress.update.call_args[1] == {"description": "Writing locks"}

    def test_stops_when_resolution_fails(self, rich_progress):
        _, progress = rich_progress
        with pytest.raises(LockOutOfDateException):
            with progress_context("Resolving", total=1):
                raise LockOutOfDateException("drift")
        progress.stop.assert_called_once()
