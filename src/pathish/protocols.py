"""Protocol definitions for the platform filesystem primitives.

The tree operations in ``pathish.files`` and the streams in
``pathish.stream`` only ever touch the filesystem through these
single-entry primitives. Designing to this interface enables:
- Substitution of recording or failing test doubles
- A clear contract for what the platform must provide

Implementations satisfy the protocol structurally (duck typing).
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import AbstractContextManager
from pathlib import Path
from typing import Protocol, runtime_checkable

__all__ = ["FileSystem"]


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for single-entry filesystem operations.

    None of the methods follow symbolic links unless told to, and none of
    them recurse.
    """

    def lexists(self, path: Path) -> bool:
        """Check if a path exists, without following symbolic links.

        Args:
            path: Path to check.

        Returns:
            True if an entry (possibly a broken link) exists at the path.
        """
        ...

    def is_dir(self, path: Path, follow_links: bool = False) -> bool:
        """Check if a path is a directory.

        Args:
            path: Path to check.
            follow_links: Resolve a symbolic link before testing.

        Returns:
            True if the path is a directory, False otherwise or if missing.
        """
        ...

    def file_key(self, path: Path) -> tuple[int, int]:
        """Identify the file a path resolves to.

        Args:
            path: Path to inspect. Symbolic links are followed.

        Returns:
            A (device, inode) pair, equal for paths to the same file.

        Raises:
            NotFoundError: If the path does not resolve to a file.
        """
        ...

    def scandir(self, path: Path) -> AbstractContextManager[Iterator[Path]]:
        """Open a directory for one-level iteration.

        The directory handle is held until the returned context exits.

        Args:
            path: Directory to list.

        Returns:
            Context manager yielding an iterator over the child paths.

        Raises:
            NotFoundError: If the directory does not exist.
            NotADirectoryError: If the path is not a directory.
        """
        ...

    def copy_entry(self, source: Path, target: Path) -> None:
        """Copy one entry without recursing.

        A file is copied byte for byte; a directory produces an empty
        directory at the target.

        Args:
            source: Existing entry to copy.
            target: Destination, which must not exist.

        Raises:
            NotFoundError: If the source does not exist.
            AlreadyExistsError: If the target exists.
        """
        ...

    def delete_entry(self, path: Path) -> bool:
        """Delete one file, link or empty directory if it exists.

        Args:
            path: Path to delete.

        Returns:
            True if deleted, False if the path was already absent.
        """
        ...
