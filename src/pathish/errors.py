"""Error types raised by pathish operations.

The pathish errors subclass the matching builtin ``OSError`` subclasses, so
callers can catch either ``NotFoundError`` or ``FileNotFoundError``.
"""

from __future__ import annotations

import errno
import os
from collections.abc import Iterator
from contextlib import contextmanager

__all__ = [
    "AlreadyExistsError",
    "InvalidPathError",
    "NotFoundError",
    "PathishError",
    "translate_os_errors",
]


class PathishError(Exception):
    """Base class for errors raised by pathish."""

    pass


class NotFoundError(PathishError, FileNotFoundError):
    """A path required by an operation does not exist."""

    @classmethod
    def for_path(cls, path: os.PathLike[str] | str) -> NotFoundError:
        """Build the error for a missing path."""
        return cls(errno.ENOENT, os.strerror(errno.ENOENT), os.fspath(path))


class AlreadyExistsError(PathishError, FileExistsError):
    """A destination exists and the operation does not overwrite."""

    @classmethod
    def for_path(cls, path: os.PathLike[str] | str) -> AlreadyExistsError:
        """Build the error for an existing destination."""
        return cls(errno.EEXIST, os.strerror(errno.EEXIST), os.fspath(path))


class InvalidPathError(PathishError, ValueError):
    """A path-like value cannot be converted to a path."""

    pass


def _rebuild(cls: type[OSError], error: OSError) -> OSError:
    """Re-create ``error`` as ``cls`` keeping errno and filenames."""
    if error.errno is None:
        return cls(*error.args)
    if error.filename2 is not None:
        return cls(error.errno, error.strerror, error.filename, None, error.filename2)
    return cls(error.errno, error.strerror, error.filename)


@contextmanager
def translate_os_errors() -> Iterator[None]:
    """Translate platform not-found/already-exists errors to pathish errors.

    Every other ``OSError`` (``NotADirectoryError``, ``PermissionError``,
    ...) propagates unchanged.

    Example:
        >>> with translate_os_errors():
        ...     os.mkdir(existing)  # raises AlreadyExistsError
    """
    try:
        yield
    except PathishError:
        raise
    except FileNotFoundError as e:
        raise _rebuild(NotFoundError, e) from e
    except FileExistsError as e:
        raise _rebuild(AlreadyExistsError, e) from e
