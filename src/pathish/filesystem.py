"""Platform implementation of the filesystem primitives.

``RealFileSystem`` wraps standard library ``os`` and ``shutil`` calls and
satisfies the ``FileSystem`` protocol structurally.
"""

from __future__ import annotations

import os
import shutil
import stat
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from pathish.errors import AlreadyExistsError, NotFoundError, translate_os_errors

__all__ = ["RealFileSystem", "stat_mode"]


def stat_mode(path: Path, follow_links: bool = False) -> int | None:
    """Return the ``st_mode`` of a path, or None if it cannot be read."""
    try:
        return os.stat(path, follow_symlinks=follow_links).st_mode
    except (OSError, ValueError):
        return None


class RealFileSystem:
    """Production filesystem implementation.

    Stateless; every call queries the platform again.
    """

    @classmethod
    def create(cls) -> RealFileSystem:
        """Create the default platform filesystem."""
        return cls()

    def lexists(self, path: Path) -> bool:
        """Check if a path exists, without following symbolic links."""
        return os.path.lexists(path)

    def is_dir(self, path: Path, follow_links: bool = False) -> bool:
        """Check if a path is a directory."""
        mode = stat_mode(path, follow_links)
        return mode is not None and stat.S_ISDIR(mode)

    def file_key(self, path: Path) -> tuple[int, int]:
        """Return the (device, inode) pair of the file a path resolves to."""
        with translate_os_errors():
            info = os.stat(path)
        return info.st_dev, info.st_ino

    @contextmanager
    def scandir(self, path: Path) -> Iterator[Iterator[Path]]:
        """Open a directory and yield an iterator over its children."""
        with translate_os_errors():
            entries = os.scandir(path)
        with entries:
            yield (path / entry.name for entry in entries)

    def copy_entry(self, source: Path, target: Path) -> None:
        """Copy a file, or create an empty directory for a directory."""
        if not os.path.lexists(source):
            raise NotFoundError.for_path(source)
        if os.path.lexists(target):
            raise AlreadyExistsError.for_path(target)
        with translate_os_errors():
            if os.path.isdir(source):
                os.mkdir(target)
                return
            # Exclusive create so a concurrently created target is not clobbered
            with open(source, "rb") as src, open(target, "xb") as dst:
                shutil.copyfileobj(src, dst)

    def delete_entry(self, path: Path) -> bool:
        """Delete a file, link or empty directory if it exists."""
        try:
            if self.is_dir(path):
                os.rmdir(path)
            else:
                os.unlink(path)
        except FileNotFoundError:
            return False
        return True
