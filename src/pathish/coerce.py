"""Conversion of path-like values to ``pathlib.Path``.

Every pathish operation passes its path arguments through ``as_path``. The
accepted inputs are text (``str`` or ``bytes``), file URIs (``Uri`` or a
parsed ``urllib.parse`` result), native handles (``os.PathLike`` objects
such as ``os.DirEntry`` and open file objects), ``pathlib`` paths, and
``None``. Conversion never touches the filesystem.

Other types can take part by registering a converter:

    >>> @as_path.register(MyHandle)
    ... def _(value: MyHandle) -> Path:
    ...     return Path(value.location)
"""

from __future__ import annotations

import io
import os
from dataclasses import dataclass
from functools import singledispatch
from pathlib import Path, PurePath
from typing import Any
from urllib.parse import ParseResult, SplitResult, urlsplit
from urllib.request import url2pathname

from pathish.errors import InvalidPathError

__all__ = ["Uri", "as_path", "parent_of", "path", "require_path"]

# Authorities that still denote the local machine in a file URI
LOCAL_AUTHORITIES = ("", "localhost")


@dataclass(frozen=True)
class Uri:
    """A URI string, kept apart from plain text paths.

    Attributes:
        text: The URI as written, e.g. ``file:///tmp/data.txt``.
    """

    text: str

    @classmethod
    def from_path(cls, value: Any) -> Uri:
        """Create a ``file`` URI for a path-like value.

        Relative paths are made absolute against the working directory.
        """
        return cls(require_path(value).absolute().as_uri())

    def __str__(self) -> str:
        return self.text


def _file_uri_to_path(
    scheme: str, netloc: str, uri_path: str, query: str, fragment: str, original: str
) -> Path:
    if scheme.lower() != "file":
        raise InvalidPathError(f"URI scheme is not \"file\": {original}")
    if not uri_path.startswith("/"):
        raise InvalidPathError(f"URI is not hierarchical: {original}")
    if netloc.lower() not in LOCAL_AUTHORITIES:
        raise InvalidPathError(f"URI has an authority component: {original}")
    if query:
        raise InvalidPathError(f"URI has a query component: {original}")
    if fragment:
        raise InvalidPathError(f"URI has a fragment component: {original}")
    return Path(url2pathname(uri_path))


@singledispatch
def as_path(value: Any) -> Path | None:
    """Convert a path-like value to a ``Path``.

    Args:
        value: Text, URI, native handle, path, or None.

    Returns:
        The equivalent ``Path``, or None when ``value`` is None.

    Raises:
        InvalidPathError: If a URI or handle does not denote a local path.
        TypeError: If ``value`` is of an unsupported type.
    """
    raise TypeError(f"Cannot convert {type(value).__name__} to a path")


@as_path.register(type(None))
def _(value: None) -> None:
    return None


@as_path.register(str)
def _(value: str) -> Path:
    return Path(value)


@as_path.register(bytes)
def _(value: bytes) -> Path:
    return Path(os.fsdecode(value))


@as_path.register(PurePath)
def _(value: PurePath) -> Path:
    if isinstance(value, Path):
        return value
    return Path(value)


@as_path.register(os.PathLike)
def _(value: os.PathLike) -> Path:
    return Path(os.fsdecode(os.fspath(value)))


@as_path.register(io.IOBase)
def _(value: io.IOBase) -> Path:
    # Files opened from a descriptor report an int name
    name = getattr(value, "name", None)
    if isinstance(name, (str, bytes)):
        return Path(os.fsdecode(name))
    raise InvalidPathError(f"File object has no path: {value!r}")


@as_path.register(Uri)
def _(value: Uri) -> Path:
    parts = urlsplit(value.text)
    return _file_uri_to_path(
        parts.scheme, parts.netloc, parts.path, parts.query, parts.fragment, value.text
    )


@as_path.register(SplitResult)
def _(value: SplitResult) -> Path:
    return _file_uri_to_path(
        value.scheme, value.netloc, value.path, value.query, value.fragment, value.geturl()
    )


@as_path.register(ParseResult)
def _(value: ParseResult) -> Path:
    uri_path = f"{value.path};{value.params}" if value.params else value.path
    return _file_uri_to_path(
        value.scheme, value.netloc, uri_path, value.query, value.fragment, value.geturl()
    )


def require_path(value: Any) -> Path:
    """Convert a path-like value, rejecting None.

    Raises:
        InvalidPathError: If ``value`` is None or cannot be converted.
    """
    result = as_path(value)
    if result is None:
        raise InvalidPathError("A path is required")
    return result


def path(first: Any, *more: str) -> Path:
    """Create a path from one or more segments.

    Args:
        first: First segment, any path-like value.
        *more: Further segments joined onto the first.

    Returns:
        The joined path.
    """
    return require_path(first).joinpath(*more)


def parent_of(value: Any) -> Path | None:
    """Return the parent of a path, or None if it has none.

    Roots and single relative segments have no parent, so for them (and for
    None) the result is None instead of the path itself or ``.``.
    """
    current = as_path(value)
    if current is None:
        return None
    parent = current.parent
    if parent == current or not parent.parts:
        return None
    return parent
