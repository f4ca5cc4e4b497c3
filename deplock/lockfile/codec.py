"""
Lock file codec.

Lock files hold one ``group:name:version`` entry per line, preceded by a
fixed comment header. Comment and blank lines are presentation only and are
dropped when reading. Lines are not interpreted when parsed; callers split
them with ``split_entry`` at the point of use.
"""

from typing import Iterable, List, Mapping, Tuple

from deplock.config import TOOL_NAME
from deplock.errors import MalformedLockEntryError
from deplock.error_messages import format_error

COMMENT_PREFIX = "#"
SEPARATOR = ":"

LOCKFILE_HEADER = (
    f"# This is a {TOOL_NAME} generated file for dependency locking.\n"
    "# Manual edits can break the build and are not advised.\n"
    "# This file is expected to be part of source control.\n"
)


def parse_lines(raw_lines: Iterable[str]) -> List[str]:
    """Return the entry lines of a lock file, in file order.

    Empty lines and lines starting with ``#`` are dropped. Line terminators
    are stripped; nothing else about a line is checked.
    """
    lines = []
    for raw in raw_lines:
        line = raw.rstrip("\r\n")
        if not line or line.startswith(COMMENT_PREFIX):
            continue
        lines.append(line)
    return lines


def parse_text(text: str) -> List[str]:
    return parse_lines(text.splitlines())


def serialize(modules: Mapping[str, str], header: str = LOCKFILE_HEADER) -> str:
    """Render ``module -> version`` as lock file text.

    Entries are written in ascending module order, each terminated by a
    newline, after the header.
    """
    parts = [header]
    for module in sorted(modules):
        parts.append(f"{module}{SEPARATOR}{modules[module]}\n")
    return "".join(parts)


def split_entry(line: str) -> Tuple[str, str]:
    """Split a lock line into ``(module, version)`` at the last separator.

    Everything before the last ``:`` is the module notation (``group:name``),
    the rest is the version. Coordinates containing ``:`` are therefore not
    representable.

    Raises:
        MalformedLockEntryError: If there is no separator, or the module or
            version part is empty.
    """
    module, sep, version = line.rpartition(SEPARATOR)
    if not sep or not module or not version:
        raise MalformedLockEntryError(
            format_error('LOCK_ENTRY_MALFORMED', line=line),
            line=line,
        )
    return module, version


def join_entry(module: str, version: str) -> str:
    return f"{module}{SEPARATOR}{version}"
