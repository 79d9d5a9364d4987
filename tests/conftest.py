"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from pathish.filesystem import RealFileSystem


class RecordingFileSystem(RealFileSystem):
    """Real filesystem that records every primitive it performs.

    Events are (kind, path) tuples where kind is one of "copy", "delete",
    "open" or "close"; "open"/"close" bracket directory handles.
    """

    def __init__(self) -> None:
        self.events: list[tuple[str, Path]] = []

    def copy_entry(self, source: Path, target: Path) -> None:
        self.events.append(("copy", target))
        super().copy_entry(source, target)

    def delete_entry(self, path: Path) -> bool:
        self.events.append(("delete", path))
        return super().delete_entry(path)

    @contextmanager
    def scandir(self, path: Path) -> Iterator[Iterator[Path]]:
        self.events.append(("open", path))
        try:
            with super().scandir(path) as children:
                yield children
        finally:
            self.events.append(("close", path))

    def of_kind(self, kind: str) -> list[Path]:
        """Return the paths recorded for one kind of event, in order."""
        return [path for event, path in self.events if event == kind]


@pytest.fixture
def recording_fs() -> RecordingFileSystem:
    """Create a filesystem that records its operations."""
    return RecordingFileSystem()


@pytest.fixture
def mock_filesystem() -> MagicMock:
    """Create a mock FileSystem for testing.

    The mock tracks all filesystem operations without touching real files.
    """
    fs = MagicMock()
    fs.lexists.return_value = False
    fs.is_dir.return_value = False
    fs.delete_entry.return_value = False
    return fs


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """Create a small tree of files and directories.

    Layout::

        source/
            top.txt
            a/
                b.txt
                c/
                    d.txt
                    e/
            z/
                y.bin
    """
    root = tmp_path / "source"
    (root / "a" / "c" / "e").mkdir(parents=True)
    (root / "z").mkdir()
    (root / "top.txt").write_text("top")
    (root / "a" / "b.txt").write_text("bee")
    (root / "a" / "c" / "d.txt").write_text("dee")
    (root / "z" / "y.bin").write_bytes(bytes(range(256)))
    return root


@pytest.fixture
def tree_files() -> list[str]:
    """Relative paths of the files in ``source_tree``."""
    return ["top.txt", "a/b.txt", "a/c/d.txt", "z/y.bin"]
