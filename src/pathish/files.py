"""Filesystem operations over path-like values.

A straightforward wrapper of common ``os``, ``shutil`` and ``tempfile``
functionality. Every function converts its path arguments with
``pathish.coerce.as_path`` first, so strings, file URIs, ``os.DirEntry``
objects, open files and ``pathlib`` paths are all accepted.

Recursive copy and delete are not atomic: the first failure stops the walk
and propagates, and whatever was copied or deleted before it stays that way.
"""

from __future__ import annotations

import itertools
import logging
import os
import shutil
import stat
import tempfile
from collections.abc import Generator, Iterable
from pathlib import Path
from typing import IO, Any

from pathish.coerce import as_path, parent_of, require_path
from pathish.errors import AlreadyExistsError, NotFoundError, translate_os_errors
from pathish.filesystem import RealFileSystem, stat_mode
from pathish.options import (
    AppendOptions,
    LinkOptions,
    ReadOptions,
    TreeOptions,
    WriteOptions,
)
from pathish.protocols import FileSystem
from pathish.stream import Stream, walk

logger = logging.getLogger(__name__)

__all__ = [
    "copy",
    "delete",
    "exists",
    "is_dir",
    "is_file",
    "is_link",
    "is_same_file",
    "make_dir",
    "make_dirs",
    "make_file",
    "make_link",
    "make_parents",
    "move",
    "open_input",
    "open_output",
    "open_reader",
    "open_writer",
    "read_all_lines",
    "read_bytes",
    "read_lines",
    "read_link",
    "read_str",
    "size",
    "temp_dir",
    "temp_file",
    "write_bytes",
    "write_lines",
    "write_str",
]


# ============================================================================
# Predicates
# ============================================================================


def exists(path: Any, **options: Any) -> bool:
    """Test whether the path exists.

    Symbolic links are not followed by default, so a broken link exists.
    Options include:
        follow_links: test the link target instead (default False)
    """
    opts = LinkOptions.from_kwargs(options)
    target = require_path(path)
    if opts.follow_links:
        return os.path.exists(target)
    return os.path.lexists(target)


def is_file(path: Any, **options: Any) -> bool:
    """Test whether the path is a regular file.

    Options include:
        follow_links: test the link target instead (default False)
    """
    opts = LinkOptions.from_kwargs(options)
    mode = stat_mode(require_path(path), opts.follow_links)
    return mode is not None and stat.S_ISREG(mode)


def is_dir(path: Any, **options: Any) -> bool:
    """Test whether the path is a directory.

    Options include:
        follow_links: test the link target instead (default False)
    """
    opts = LinkOptions.from_kwargs(options)
    mode = stat_mode(require_path(path), opts.follow_links)
    return mode is not None and stat.S_ISDIR(mode)


def is_link(path: Any) -> bool:
    """Test whether the path is a symbolic link."""
    mode = stat_mode(require_path(path), follow_links=False)
    return mode is not None and stat.S_ISLNK(mode)


def is_same_file(x: Any, y: Any) -> bool:
    """Test whether two paths point to the same file.

    Equal paths are the same file without touching the filesystem;
    otherwise both are resolved, following symbolic links.

    Raises:
        NotFoundError: If the paths differ and either does not exist.
    """
    first, second = require_path(x), require_path(y)
    if first == second:
        return True
    with translate_os_errors():
        return os.path.samefile(first, second)


def size(path: Any) -> int:
    """Return the size of the file at the path, in bytes."""
    with translate_os_errors():
        return os.stat(require_path(path)).st_size


# ============================================================================
# Creation
# ============================================================================


def make_dir(path: Any) -> Path:
    """Create an empty directory at the path. Parents must exist already."""
    target = require_path(path)
    with translate_os_errors():
        target.mkdir()
    return target


def make_dirs(path: Any) -> Path | None:
    """Create a directory, including any missing parents.

    An existing directory is left alone. None is passed through, so the
    result of ``parent_of`` can be given directly.
    """
    target = as_path(path)
    if target is None:
        return None
    with translate_os_errors():
        target.mkdir(parents=True, exist_ok=True)
    return target


def make_parents(path: Any) -> Path | None:
    """Create the parent directories of the path, if they don't exist."""
    return make_dirs(parent_of(require_path(path)))


def make_file(path: Any) -> Path:
    """Create an empty file at the path. Fails if anything exists there."""
    target = require_path(path)
    with translate_os_errors():
        target.touch(exist_ok=False)
    return target


def make_link(path: Any, target: Any) -> Path:
    """Create a symbolic link at ``path`` pointing to ``target``.

    The target does not need to exist.
    """
    link = require_path(path)
    with translate_os_errors():
        link.symlink_to(require_path(target))
    return link


def read_link(path: Any) -> Path:
    """Read the target of a symbolic link.

    Raises:
        NotFoundError: If nothing exists at the path.
        OSError: If the path is not a symbolic link.
    """
    with translate_os_errors():
        return Path(os.readlink(require_path(path)))


def temp_dir(prefix: str | None = None, dir: Any = None) -> Path:
    """Create a temporary directory.

    Uses the platform temp directory unless ``dir`` is given.
    """
    with translate_os_errors():
        return Path(tempfile.mkdtemp(prefix=prefix, dir=as_path(dir)))


def temp_file(
    prefix: str | None = None, suffix: str | None = None, dir: Any = None
) -> Path:
    """Create an empty temporary file.

    Uses the platform temp directory unless ``dir`` is given.
    """
    with translate_os_errors():
        fd, name = tempfile.mkstemp(suffix=suffix, prefix=prefix, dir=as_path(dir))
    os.close(fd)
    return Path(name)


# ============================================================================
# Move, copy and delete
# ============================================================================


def move(source: Any, target: Any) -> Path:
    """Move the file or directory at ``source`` to ``target``.

    Raises:
        NotFoundError: If the source does not exist.
        AlreadyExistsError: If the target exists.
    """
    src, dst = require_path(source), require_path(target)
    if not os.path.lexists(src):
        raise NotFoundError.for_path(src)
    if os.path.lexists(dst):
        raise AlreadyExistsError.for_path(dst)
    logger.debug("Moving %s to %s", src, dst)
    with translate_os_errors():
        shutil.move(os.fspath(src), os.fspath(dst))
    return dst


def copy(
    source: Any,
    destination: Any,
    *,
    fs: FileSystem | None = None,
    **options: Any,
) -> Path:
    """Copy a file or directory.

    Without ``recurse`` (or for anything but a directory) exactly one entry
    is copied: a file's bytes, or an empty directory. With ``recurse`` every
    entry below the source directory is copied to the same relative place
    under the destination, which must already exist. Options include:
        recurse: true to copy all files underneath the directory
            (default False)

    Args:
        source: Entry to copy, any path-like value.
        destination: Where to copy it, any path-like value.
        fs: Filesystem primitives to use (default: the platform's).

    Returns:
        The destination path.

    Raises:
        NotFoundError: If the source (or the destination's parent) is missing.
        AlreadyExistsError: If a destination entry already exists.
    """
    opts = TreeOptions.from_kwargs(options)
    src, dst = require_path(source), require_path(destination)
    fs = fs or RealFileSystem.create()

    if opts.recurse and fs.is_dir(src):
        with walk(src, fs=fs) as entries:
            # The walk starts with the source itself
            for entry in itertools.islice(entries, 1, None):
                copy(entry, dst / entry.relative_to(src), fs=fs)
        return dst

    logger.debug("Copying %s to %s", src, dst)
    fs.copy_entry(src, dst)
    return dst


def _delete_tree(fs: FileSystem, root: Path) -> None:
    """Delete a directory tree in post-order.

    Files are deleted as their directory is listed; each directory is
    deleted only after everything below it.
    """
    pending: list[tuple[Path, bool]] = [(root, False)]
    while pending:
        directory, listed = pending.pop()
        if listed:
            fs.delete_entry(directory)
            logger.debug("Deleted directory %s", directory)
            continue
        pending.append((directory, True))
        with fs.scandir(directory) as children:
            entries = list(children)
        for child in entries:
            if fs.is_dir(child):
                pending.append((child, False))
            else:
                fs.delete_entry(child)
                logger.debug("Deleted %s", child)


def delete(path: Any, *, fs: FileSystem | None = None, **options: Any) -> bool:
    """Delete a file or directory. Will not fail if the path does not exist.

    Symbolic links are deleted, never followed. Options include:
        recurse: true to delete everything underneath the directory
            (default False)

    Args:
        path: Entry to delete, any path-like value.
        fs: Filesystem primitives to use (default: the platform's).

    Returns:
        True if something was deleted, False if the path was absent.

    Raises:
        OSError: If a directory is not empty and ``recurse`` is not set.
    """
    opts = TreeOptions.from_kwargs(options)
    target = require_path(path)
    fs = fs or RealFileSystem.create()

    if opts.recurse and fs.is_dir(target):
        _delete_tree(fs, target)
        return True

    deleted = fs.delete_entry(target)
    if deleted:
        logger.debug("Deleted %s", target)
    return deleted


# ============================================================================
# Reading
# ============================================================================


def read_bytes(path: Any) -> bytes:
    """Read all bytes from a file."""
    with translate_os_errors():
        return require_path(path).read_bytes()


def read_str(path: Any, **options: Any) -> str:
    """Read a whole file as a string. Line endings are kept as they are.

    Options include:
        encoding: name of a codec known to ``codecs`` (default "utf-8")
    """
    opts = ReadOptions.from_kwargs(options)
    return read_bytes(path).decode(opts.encoding)


def _lines(handle: IO[str]) -> Generator[str, None, None]:
    with handle:
        for line in handle:
            yield line.rstrip("\n")


def read_lines(path: Any, **options: Any) -> Stream[str]:
    """Read lines from a file lazily.

    Lines are split on any of ``\\n``, ``\\r\\n`` or ``\\r`` and returned
    without their terminator. The file stays open until the stream is
    closed. Options include:
        encoding: name of a codec known to ``codecs`` (default "utf-8")
    """
    handle = open_reader(path, **options)
    return Stream(_lines(handle), on_close=handle.close)


def read_all_lines(path: Any, **options: Any) -> list[str]:
    """Read all lines from a file into a list.

    Options include:
        encoding: name of a codec known to ``codecs`` (default "utf-8")
    """
    with read_lines(path, **options) as lines:
        return list(lines)


def open_reader(path: Any, **options: Any) -> IO[str]:
    """Open a file for reading text.

    Options include:
        encoding: name of a codec known to ``codecs`` (default "utf-8")
    """
    opts = ReadOptions.from_kwargs(options)
    with translate_os_errors():
        return open(require_path(path), encoding=opts.encoding)


def open_input(path: Any) -> IO[bytes]:
    """Open a file for reading bytes."""
    with translate_os_errors():
        return open(require_path(path), "rb")


# ============================================================================
# Writing
# ============================================================================


def write_bytes(path: Any, data: bytes, **options: Any) -> Path:
    """Write all bytes to a file, truncating any existing content.

    Options include:
        append: true to open the file in append mode (default False)
    """
    opts = AppendOptions.from_kwargs(options)
    target = require_path(path)
    with translate_os_errors(), open(target, opts.binary_mode) as handle:
        handle.write(data)
    return target


def write_str(path: Any, content: str, **options: Any) -> Path:
    """Write a string to a file, truncating any existing content.

    Options include:
        append: true to open the file in append mode (default False)
        encoding: name of a codec known to ``codecs`` (default "utf-8")
    """
    opts = WriteOptions.from_kwargs(options)
    return write_bytes(path, content.encode(opts.encoding), append=opts.append)


def write_lines(path: Any, lines: Iterable[str], **options: Any) -> Path:
    """Write lines to a file, each followed by a newline.

    Options include:
        append: true to open the file in append mode (default False)
        encoding: name of a codec known to ``codecs`` (default "utf-8")
    """
    opts = WriteOptions.from_kwargs(options)
    content = "".join(f"{line}\n" for line in lines)
    return write_bytes(path, content.encode(opts.encoding), append=opts.append)


def open_writer(path: Any, **options: Any) -> IO[str]:
    """Open a file for writing text.

    Options include:
        append: true to open the file in append mode (default False)
        encoding: name of a codec known to ``codecs`` (default "utf-8")
    """
    opts = WriteOptions.from_kwargs(options)
    with translate_os_errors():
        return open(require_path(path), opts.text_mode, encoding=opts.encoding)


def open_output(path: Any, **options: Any) -> IO[bytes]:
    """Open a file for writing bytes.

    Options include:
        append: true to open the file in append mode (default False)
    """
    opts = AppendOptions.from_kwargs(options)
    with translate_os_errors():
        return open(require_path(path), opts.binary_mode)
