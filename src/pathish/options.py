"""Option models for pathish operations.

Operations take their options as keyword arguments and validate them
through these models, so a misspelled option or an unknown encoding fails
loudly instead of being ignored.
"""

from __future__ import annotations

import codecs
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

# Encoding used by every text operation unless ``encoding`` is given
DEFAULT_ENCODING = "utf-8"

__all__ = [
    "DEFAULT_ENCODING",
    "AppendOptions",
    "LinkOptions",
    "ReadOptions",
    "TreeOptions",
    "WriteOptions",
]


class _Options(BaseModel):
    """Common configuration for all option models."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def from_kwargs(cls, options: dict[str, Any]) -> Any:
        """Validate keyword options.

        Args:
            options: Keyword arguments passed to an operation.

        Returns:
            The validated options model.

        Raises:
            pydantic.ValidationError: If an option is unknown or invalid.
        """
        return cls.model_validate(options)


class TreeOptions(_Options):
    """Options for copy and delete."""

    recurse: bool = False


class LinkOptions(_Options):
    """Options for predicates and traversal.

    Symbolic links are not followed unless ``follow_links`` is set.
    """

    follow_links: bool = False


class ReadOptions(_Options):
    """Options for text reads."""

    encoding: str = DEFAULT_ENCODING

    @field_validator("encoding")
    @classmethod
    def known_encoding(cls, value: str) -> str:
        # Only str to bytes codecs; base64, rot13 and the like are rejected
        try:
            name = codecs.lookup(value).name
            "".encode(name)
            b"".decode(name)
        except LookupError as e:
            raise ValueError(f"Unsupported encoding: {value}") from e
        return name


class AppendOptions(_Options):
    """Options for binary writes.

    Without ``append`` the file is created or truncated; with ``append`` it
    is created if missing and written at the end.
    """

    append: bool = False

    @property
    def text_mode(self) -> str:
        """Mode string for ``open`` in text mode."""
        return "a" if self.append else "w"

    @property
    def binary_mode(self) -> str:
        """Mode string for ``open`` in binary mode."""
        return "ab" if self.append else "wb"


class WriteOptions(AppendOptions, ReadOptions):
    """Options for text writes: ``append`` plus ``encoding``."""
