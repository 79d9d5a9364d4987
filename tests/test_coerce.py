"""Tests for path coercion."""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath
from urllib.parse import urlparse, urlsplit

import pytest

from pathish.coerce import Uri, as_path, parent_of, path, require_path
from pathish.errors import InvalidPathError


class TestAsPath:
    """Tests for as_path conversions."""

    def test_none_is_propagated(self) -> None:
        """Test None converts to None instead of raising."""
        assert as_path(None) is None

    def test_relative_string(self) -> None:
        """Test a relative string is parsed without resolving it."""
        assert as_path("a/b.txt") == Path("a/b.txt")
        assert not as_path("a/b.txt").is_absolute()

    def test_absolute_string(self) -> None:
        """Test an absolute string keeps its location."""
        assert as_path("/tmp/data") == Path("/tmp/data")

    def test_string_is_not_checked_for_existence(self, tmp_path: Path) -> None:
        """Test converting a missing path does not touch the filesystem."""
        missing = tmp_path / "missing" / "file.txt"

        assert as_path(str(missing)) == missing
        assert not missing.parent.exists()

    def test_bytes(self) -> None:
        """Test bytes are decoded with the filesystem encoding."""
        assert as_path(b"dir/file") == Path("dir/file")

    def test_path_is_returned_unchanged(self) -> None:
        """Test an existing Path passes through as the same object."""
        original = Path("some/where")

        assert as_path(original) == original

    def test_pure_path_becomes_concrete(self) -> None:
        """Test a pure path is converted to a concrete Path."""
        result = as_path(PurePosixPath("x/y"))

        assert isinstance(result, Path)
        assert result == Path("x/y")

    @pytest.mark.parametrize(
        "value", ["plain", "/abs/path", Path("p/q"), b"raw", Uri("file:///tmp/u")]
    )
    def test_idempotent(self, value: object) -> None:
        """Test converting twice gives the same result as converting once."""
        once = as_path(value)

        assert as_path(once) == once

    def test_dir_entry(self, tmp_path: Path) -> None:
        """Test an os.DirEntry converts through its own path."""
        (tmp_path / "child.txt").touch()

        with os.scandir(tmp_path) as entries:
            entry = next(entries)
            result = as_path(entry)

        assert result == tmp_path / "child.txt"

    def test_open_file(self, tmp_path: Path) -> None:
        """Test an open file object converts to the path it was opened with."""
        target = tmp_path / "opened.txt"

        with open(target, "w") as handle:
            assert as_path(handle) == target

    def test_file_opened_from_descriptor_is_rejected(self, tmp_path: Path) -> None:
        """Test a file object without a path name is rejected."""
        target = tmp_path / "fd.txt"
        fd = os.open(target, os.O_CREAT | os.O_WRONLY)

        with open(fd, "w") as handle, pytest.raises(InvalidPathError):
            as_path(handle)

    def test_unsupported_type(self) -> None:
        """Test values outside the accepted set raise TypeError."""
        with pytest.raises(TypeError, match="int"):
            as_path(42)


class TestUriCoercion:
    """Tests for URI inputs."""

    def test_file_uri(self) -> None:
        """Test a file URI converts to an absolute path."""
        result = as_path(Uri("file:///tmp/data.txt"))

        assert result == Path("/tmp/data.txt")
        assert result.is_absolute()

    def test_percent_escapes_are_decoded(self) -> None:
        """Test escaped characters in the URI path are decoded."""
        assert as_path(Uri("file:///tmp/with%20space")) == Path("/tmp/with space")

    def test_localhost_authority(self) -> None:
        """Test the localhost authority is accepted."""
        assert as_path(Uri("file://localhost/etc/hosts")) == Path("/etc/hosts")

    def test_split_and_parse_results(self) -> None:
        """Test parsed urllib results are accepted as URIs."""
        assert as_path(urlsplit("file:///var/log")) == Path("/var/log")
        assert as_path(urlparse("file:///var/log")) == Path("/var/log")

    def test_round_trip_from_path(self, tmp_path: Path) -> None:
        """Test a URI built from a path converts back to that path."""
        uri = Uri.from_path(tmp_path / "é x.txt")

        assert uri.text.startswith("file:///")
        assert as_path(uri) == tmp_path / "é x.txt"

    @pytest.mark.parametrize(
        "text",
        [
            "http://example.com/file.txt",
            "file:relative/opaque",
            "file://remote-host/share/file.txt",
            "file:///tmp/file.txt?version=2",
            "file:///tmp/file.txt#section",
            "file:",
        ],
    )
    def test_invalid_uris(self, text: str) -> None:
        """Test unsupported URIs raise InvalidPathError."""
        with pytest.raises(InvalidPathError):
            as_path(Uri(text))

    def test_invalid_path_error_is_value_error(self) -> None:
        """Test InvalidPathError can be caught as ValueError."""
        with pytest.raises(ValueError):
            as_path(urlsplit("https://example.com/"))


class TestHelpers:
    """Tests for path, require_path and parent_of."""

    def test_path_joins_segments(self) -> None:
        """Test path joins the first segment with the rest."""
        assert path("a", "b", "c.txt") == Path("a/b/c.txt")

    def test_path_accepts_path_like_first_segment(self) -> None:
        """Test the first segment may be any path-like value."""
        assert path(Uri("file:///root"), "x") == Path("/root/x")

    def test_path_requires_first_segment(self) -> None:
        """Test path rejects None as the first segment."""
        with pytest.raises(InvalidPathError):
            path(None, "x")

    def test_require_path_rejects_none(self) -> None:
        """Test require_path raises for None."""
        with pytest.raises(InvalidPathError):
            require_path(None)

    def test_parent_of_nested(self) -> None:
        """Test the parent of a nested path."""
        assert parent_of("/a/b/c") == Path("/a/b")

    def test_parent_of_root_is_none(self) -> None:
        """Test a root has no parent."""
        assert parent_of("/") is None

    def test_parent_of_single_segment_is_none(self) -> None:
        """Test a single relative segment has no parent."""
        assert parent_of("file.txt") is None

    def test_parent_of_none_is_none(self) -> None:
        """Test absence propagates through parent_of."""
        assert parent_of(None) is None
