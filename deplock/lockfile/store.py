"""
Lock store: one lock file per configuration under a fixed root directory.

The root is created lazily on the first write, never at construction.
A missing lock file is a valid state meaning "nothing recorded".
"""

import os
import threading
from pathlib import Path
from typing import List, Mapping, Optional, Union

from deplock.config import FILE_GLOB, FILE_SUFFIX, LOCKFILE_ENCODING, LOCKFILE_READ_ENCODING
from deplock.errors import ErrorCode, IOFailure, MalformedLockEntryError
from deplock.error_messages import format_error
from deplock.lockfile.codec import parse_text, serialize
from deplock.lockfile.models import LockEntry


class LockStore:
    """Read and write lock files for named configurations.

    Args:
        root: Lock directory. Fixed for the lifetime of the store.
        logger: Optional logger; see ``deplock.dl_logging.setup_logging``.
    """

    def __init__(self, root: Union[str, Path], logger=None):
        self.root = Path(root)
        self.logger = logger

    def __repr__(self):
        return f"LockStore(root={str(self.root)!r})"

    def path_for(self, configuration_name: str) -> Path:
        return self.root / f"{configuration_name}{FILE_SUFFIX}"

    def exists(self, configuration_name: str) -> bool:
        return self.path_for(configuration_name).is_file()

    def ensure_root(self) -> Path:
        """Create the lock directory and its parents. Safe to call concurrently."""
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise IOFailure(
                format_error('LOCK_DIR_FAILED', path=self.root),
                path=str(self.root),
                operation="mkdir",
                cause=e,
                code=ErrorCode.IO_DIRECTORY_FAILED,
            ) from e
        return self.root

    def read(self, configuration_name: str) -> List[str]:
        """Return the recorded entry lines, or ``[]`` if there is no lock file.

        Raises:
            IOFailure: If the file exists but cannot be read or decoded.
        """
        path = self.path_for(configuration_name)
        try:
            text = path.read_text(encoding=LOCKFILE_READ_ENCODING)
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as e:
            raise IOFailure(
                format_error('LOCK_READ_FAILED', configuration=configuration_name),
                path=str(path),
                operation="read",
                cause=e,
                code=ErrorCode.IO_READ_FAILED,
            ) from e

        lines = parse_text(text)
        if self.logger is not None:
            self.logger.verboser(f"Read {len(lines)} lock entries from {path}")
        return lines

    def read_entries(self, configuration_name: str) -> List[LockEntry]:
        """Return the recorded entries as ``LockEntry`` objects.

        Raises:
            IOFailure: If the file cannot be read.
            MalformedLockEntryError: If a line is not ``group:name:version``.
        """
        entries = []
        for line in self.read(configuration_name):
            try:
                entries.append(LockEntry.parse(line))
            except MalformedLockEntryError as e:
                raise MalformedLockEntryError(
                    e.message,
                    line=line,
                    path=str(self.path_for(configuration_name)),
                ) from e
        return entries

    def write(self, configuration_name: str, modules: Mapping[str, str]) -> Path:
        """Replace the lock file of a configuration with ``modules``.

        The content is written to a temporary file in the lock directory and
        moved over the target, so readers never observe a partial file.

        Raises:
            IOFailure: If the directory or the file cannot be written.
        """
        self.ensure_root()
        path = self.path_for(configuration_name)
        content = serialize(modules)

        # Plain open so the lock file gets the usual umask-derived mode
        tmp_path = path.with_name(f".{path.name}.tmp.{os.getpid()}.{threading.get_ident()}")
        try:
            with open(tmp_path, 'w', encoding=LOCKFILE_ENCODING, newline="\n") as f:
                f.write(content)
            os.replace(tmp_path, path)
        except OSError as e:
            raise IOFailure(
                format_error('LOCK_WRITE_FAILED', configuration=configuration_name),
                path=str(path),
                operation="write",
                cause=e,
                code=ErrorCode.IO_WRITE_FAILED,
            ) from e
        finally:
            if tmp_path.exists():
                tmp_path.unlink()

        if self.logger is not None:
            self.logger.verbose(f"Wrote {len(modules)} lock entries to {path}")
        return path

    def configurations(self) -> List[str]:
        """Names of the configurations that have a lock file, sorted."""
        if not self.root.is_dir():
            return []
        return sorted(p.name[:-len(FILE_SUFFIX)] for p in self.root.glob(FILE_GLOB) if p.is_file())
