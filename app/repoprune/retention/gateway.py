"""Filesystem gateway used by the retention engine.

Every filesystem access of the engine goes through a FilesystemGateway
so that the pipeline can run against a fixture or in-memory tree.
LocalFilesystem is the implementation backed by the real filesystem.
"""

import logging
import os
import shutil
import stat
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from repoprune.retention.errors import DeletionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EntryStat:
    """Type and modification time of a filesystem entry.

    Attributes:
        is_directory: True for real directories (symlinks are not followed).
        last_modified: Modification time in epoch seconds.
    """

    is_directory: bool
    last_modified: float


class FilesystemGateway(ABC):
    """Abstract filesystem capability required by the engine."""

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Check if a path exists (without following symlinks)."""

    @abstractmethod
    def is_writable(self, path: Path) -> bool:
        """Check if the current process may modify a path."""

    @abstractmethod
    def list_children(self, path: Path) -> list[Path]:
        """List the immediate children of a directory.

        Raises:
            OSError: If the directory cannot be read.
        """

    @abstractmethod
    def stat(self, path: Path) -> EntryStat:
        """Return the type and modification time of a path.

        Raises:
            OSError: If the path cannot be inspected.
        """

    @abstractmethod
    def delete(self, path: Path) -> None:
        """Delete a file, or a directory with all of its content.

        Raises:
            DeletionError: If the path does not exist or cannot be removed.
        """


class LocalFilesystem(FilesystemGateway):
    """FilesystemGateway backed by the local filesystem."""

    def exists(self, path: Path) -> bool:
        return path.exists() or path.is_symlink()

    def is_writable(self, path: Path) -> bool:
        return os.access(path, os.W_OK)

    def list_children(self, path: Path) -> list[Path]:
        return list(path.iterdir())

    def stat(self, path: Path) -> EntryStat:
        st = path.lstat()
        return EntryStat(
            is_directory=stat.S_ISDIR(st.st_mode),
            last_modified=st.st_mtime,
        )

    def delete(self, path: Path) -> None:
        """Delete a single filesystem path.

        Directories (but not symlinks to directories) are removed with
        shutil.rmtree; files, symlinks and dead symlinks with Path.unlink.

        Args:
            path: Path to delete.

        Raises:
            DeletionError: If the path does not exist or an OSError occurs.
        """
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
                return

            if path.exists() or path.is_symlink():
                path.unlink()
                return
        except OSError as e:
            raise DeletionError(str(path), str(e)) from e

        raise DeletionError(str(path), f"Path does not exist: {path}")


def _sorted_children(gateway: FilesystemGateway, directory: Path) -> list[tuple[Path, EntryStat]]:
    """List children of a directory with their stats, sorted by name.

    Unreadable directories and entries are logged and skipped.
    """
    try:
        children = sorted(gateway.list_children(directory), key=lambda p: p.name)
    except OSError as e:
        logger.warning("Cannot list directory %s: %s", directory, e)
        return []

    entries: list[tuple[Path, EntryStat]] = []
    for child in children:
        try:
            entries.append((child, gateway.stat(child)))
        except OSError:
            logger.warning("Cannot determine type of: %s", child)
    return entries


def iter_files(gateway: FilesystemGateway, root: Path) -> Iterator[Path]:
    """Yield every file below a directory, depth-first, in name order.

    Args:
        gateway: Filesystem gateway to read from.
        root: Directory to walk.

    Yields:
        Paths of non-directory entries.
    """
    for child, entry in _sorted_children(gateway, root):
        if entry.is_directory:
            yield from iter_files(gateway, child)
        else:
            yield child


def iter_directories(gateway: FilesystemGateway, root: Path) -> Iterator[Path]:
    """Yield every directory below a directory in pre-order.

    A parent is always yielded before any of its descendants. The root
    itself is not yielded.

    Args:
        gateway: Filesystem gateway to read from.
        root: Directory to walk.

    Yields:
        Paths of directories.
    """
    for child, entry in _sorted_children(gateway, root):
        if entry.is_directory:
            yield child
            yield from iter_directories(gateway, child)


def contains_files(gateway: FilesystemGateway, directory: Path) -> bool:
    """Check if a directory holds at least one file at any depth.

    A directory that cannot be read completely is not known to be empty
    and counts as holding files.

    Args:
        gateway: Filesystem gateway to read from.
        directory: Directory to inspect.

    Returns:
        True unless every entry below the directory is a readable directory.
    """
    try:
        children = gateway.list_children(directory)
    except OSError as e:
        logger.warning("Cannot list directory %s, keeping it: %s", directory, e)
        return True

    for child in children:
        try:
            entry = gateway.stat(child)
        except OSError:
            logger.warning("Cannot determine type of %s, keeping %s", child, directory)
            return True
        if not entry.is_directory or contains_files(gateway, child):
            return True
    return False
