"""Lazy, closeable streams over directory entries and file lines.

A ``Stream`` wraps a generator that holds OS resources (open directory
handles or an open file). The resources are released when the stream is
closed, whether iteration finished, was abandoned early, or failed, so
streams should always be used as context managers:

    >>> with walk("build") as entries:
    ...     for entry in entries:
    ...         print(entry)
"""

from __future__ import annotations

import errno
import logging
import os
from collections.abc import Callable, Generator
from pathlib import Path
from types import TracebackType
from typing import Any, Generic, TypeVar

from pathish.coerce import require_path
from pathish.errors import NotFoundError
from pathish.filesystem import RealFileSystem
from pathish.options import LinkOptions
from pathish.protocols import FileSystem

logger = logging.getLogger(__name__)

T = TypeVar("T")

__all__ = ["Stream", "list_dir", "walk"]


class Stream(Generic[T]):
    """Single-pass iterator that must be closed after use.

    The stream cannot be restarted: iterating it again continues where the
    previous iteration stopped. Iterating a closed stream raises ValueError.
    """

    def __init__(
        self,
        items: Generator[T, None, None],
        on_close: Callable[[], Any] | None = None,
    ) -> None:
        """Initialize stream.

        Args:
            items: Generator producing the items; closed with the stream.
            on_close: Extra cleanup run once, after the generator is closed.
        """
        self._items = items
        self._on_close = on_close
        self._closed = False

    @property
    def closed(self) -> bool:
        """True once the stream has been closed."""
        return self._closed

    def __iter__(self) -> Stream[T]:
        return self

    def __next__(self) -> T:
        if self._closed:
            raise ValueError("I/O operation on closed stream")
        return next(self._items)

    def close(self) -> None:
        """Release the underlying resources. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        try:
            self._items.close()
        finally:
            if self._on_close is not None:
                self._on_close()

    def __enter__(self) -> Stream[T]:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def _descend(
    fs: FileSystem,
    directory: Path,
    depth: int,
    max_depth: int | None,
    follow_links: bool,
    ancestors: tuple[tuple[int, int], ...],
) -> Generator[Path, None, None]:
    """Yield the entries below ``directory`` in depth-first pre-order."""
    if max_depth is not None and depth > max_depth:
        return
    with fs.scandir(directory) as children:
        for child in children:
            yield child
            if not fs.is_dir(child, follow_links=follow_links):
                continue
            key: tuple[tuple[int, int], ...] = ()
            if follow_links:
                child_key = fs.file_key(child)
                if child_key in ancestors:
                    raise OSError(errno.ELOOP, "Directory cycle detected", os.fspath(child))
                key = (child_key,)
            yield from _descend(fs, child, depth + 1, max_depth, follow_links, ancestors + key)


def _walk(
    fs: FileSystem, root: Path, max_depth: int | None, follow_links: bool
) -> Generator[Path, None, None]:
    yield root
    if not fs.is_dir(root, follow_links=follow_links):
        return
    ancestors = (fs.file_key(root),) if follow_links else ()
    yield from _descend(fs, root, 1, max_depth, follow_links, ancestors)


def walk(
    path: Any,
    max_depth: int | None = None,
    *,
    fs: FileSystem | None = None,
    **options: Any,
) -> Stream[Path]:
    """Walk the file tree below a directory, depth first.

    The first element is always the given path itself; a directory is
    always produced before its contents. Options include:
        follow_links: descend into symbolically linked directories
            (default False)

    Args:
        path: Root of the walk, any path-like value.
        max_depth: Deepest level to visit; 0 yields only the root.
        fs: Filesystem primitives to use (default: the platform's).

    Returns:
        A stream of paths. Close it (or use ``with``) when done.

    Raises:
        NotFoundError: If the root does not exist.
    """
    opts = LinkOptions.from_kwargs(options)
    if max_depth is not None and max_depth < 0:
        raise ValueError("max_depth must not be negative")
    root = require_path(path)
    fs = fs or RealFileSystem.create()
    if not fs.lexists(root):
        raise NotFoundError.for_path(root)
    logger.debug("Walking %s (max_depth=%s)", root, max_depth)
    return Stream(_walk(fs, root, max_depth, opts.follow_links))


def _children(fs: FileSystem, directory: Path) -> Generator[Path, None, None]:
    with fs.scandir(directory) as children:
        yield from children


def list_dir(path: Any, *, fs: FileSystem | None = None) -> Stream[Path]:
    """List the immediate children of a directory.

    Args:
        path: Directory to list, any path-like value.
        fs: Filesystem primitives to use (default: the platform's).

    Returns:
        A stream of child paths, in platform order.

    Raises:
        NotFoundError: If the directory does not exist.
        NotADirectoryError: If the path is not a directory.
    """
    directory = require_path(path)
    fs = fs or RealFileSystem.create()
    if not fs.lexists(directory):
        raise NotFoundError.for_path(directory)
    if not fs.is_dir(directory, follow_links=True):
        raise NotADirectoryError(
            errno.ENOTDIR, os.strerror(errno.ENOTDIR), os.fspath(directory)
        )
    return Stream(_children(fs, directory))
