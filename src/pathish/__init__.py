"""Convenience layer over the platform filesystem API for path-like values."""

__version__ = "0.1.0"

from pathish.coerce import Uri, as_path, parent_of, path
from pathish.errors import (
    AlreadyExistsError,
    InvalidPathError,
    NotFoundError,
    PathishError,
)
from pathish.files import (
    copy,
    delete,
    exists,
    is_dir,
    is_file,
    is_link,
    is_same_file,
    make_dir,
    make_dirs,
    make_file,
    make_link,
    make_parents,
    move,
    open_input,
    open_output,
    open_reader,
    open_writer,
    read_all_lines,
    read_bytes,
    read_lines,
    read_link,
    read_str,
    size,
    temp_dir,
    temp_file,
    write_bytes,
    write_lines,
    write_str,
)
from pathish.protocols import FileSystem
from pathish.stream import Stream, list_dir, walk

__all__ = [
    "__version__",
    "AlreadyExistsError",
    "FileSystem",
    "InvalidPathError",
    "NotFoundError",
    "PathishError",
    "Stream",
    "Uri",
    "as_path",
    "copy",
    "delete",
    "exists",
    "is_dir",
    "is_file",
    "is_link",
    "is_same_file",
    "list_dir",
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
    "parent_of",
    "path",
    "read_all_lines",
    "read_bytes",
    "read_lines",
    "read_link",
    "read_str",
    "size",
    "temp_dir",
    "temp_file",
    "walk",
    "write_bytes",
    "write_lines",
    "write_str",
]
