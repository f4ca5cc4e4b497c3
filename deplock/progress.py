"""Progress display while configurations resolve.

On a terminal a Rich progress bar counts resolved configurations. Anywhere
else (CI, redirected output) a single status line is logged instead.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Callable, Iterator, Optional, Tuple

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

if TYPE_CHECKING:
    from logging import Logger

UpdateFunc = Callable[..., None]
SetDescriptionFunc = Callable[[str], None]


def is_interactive_terminal() -> bool:
    return Console().is_terminal


def _columns(determinate: bool) -> list:
    columns = [SpinnerColumn(), TextColumn("[progress.description]{task.description}")]
    if determinate:
        columns += [BarColumn(), MofNCompleteColumn()]
    columns.append(TimeElapsedColumn())
    return columns


@contextmanager
def progress_context(
    description: str,
    total: Optional[int] = None,
    logger: Optional["Logger"] = None,
    transient: bool = True,
) -> Iterator[Tuple[UpdateFunc, SetDescriptionFunc]]:
    """Yield ``(update, set_description)`` for the duration of the block.

    ``update(advance=1, completed=None)`` moves the bar forward, typically
    once per resolved configuration. Without a terminal both functions do
    nothing and ``logger.status`` reports the description once.
    """
    if not is_interactive_terminal():
        if logger is not None:
            logger.status(f"{description}...")
        yield (lambda advance=1, completed=None: None, lambda desc: None)
        return

    progress = Progress(*_columns(total is not None), transient=transient)
    progress.start()
    try:
        task_id = progress.add_task(description, total=total)

        def update(advance: int = 1, completed: Optional[int] = None) -> None:
            if completed is None:
                progress.update(task_id, advance=advance)
            else:
                progress.update(task_id, completed=completed)

        yield (update, lambda desc: progress.update(task_id, description=desc))
    finally:
        progress.stop()
