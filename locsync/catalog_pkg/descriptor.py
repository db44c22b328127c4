# locsync/catalog_pkg/descriptor.py
"""
Message descriptors as emitted by the scanner, and the catalog entries
they fold into.

A descriptor's `description` arrives untyped: a plain string, an object
with optional `comment` / `skipUpload` fields, or nothing. It is resolved
once here into a tagged variant so the merger never inspects raw shapes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from locsync.errors import InvalidDescriptorError

__all__ = [
    "DEFAULT_COMMENT",
    "PlainComment",
    "Structured",
    "Description",
    "MessageDescriptor",
    "CatalogEntry",
    "Catalog",
]

# The resource format does not tolerate an empty comment field.
DEFAULT_COMMENT = " "


@dataclass(frozen=True)
class PlainComment:
    text: str


@dataclass(frozen=True)
class Structured:
    comment: Optional[str] = None
    skip_upload: Optional[bool] = None


Description = Union[PlainComment, Structured, None]


def _description_from_raw(raw: Any) -> Description:
    if isinstance(raw, str):
        return PlainComment(raw)
    if isinstance(raw, dict):
        comment = raw.get("comment")
        skip = raw.get("skipUpload")
        return Structured(
            comment=comment if isinstance(comment, str) else None,
            skip_upload=skip if isinstance(skip, bool) else None,
        )
    return None


@dataclass(frozen=True)
class MessageDescriptor:
    id: str
    default_message: str
    description: Description = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "MessageDescriptor":
        """
        Build from the scanner's JSON shape:
            {"id": ..., "defaultMessage": ..., "description": ...}
        Raises InvalidDescriptorError when `id` is missing or empty.
        """
        message_id = raw.get("id")
        if not isinstance(message_id, str) or not message_id:
            raise InvalidDescriptorError(f"descriptor without a usable id: {raw!r}")

        default_message = raw.get("defaultMessage")
        if default_message is None:
            default_message = ""

        return cls(
            id=message_id,
            default_message=str(default_message),
            description=_description_from_raw(raw.get("description")),
        )

    @property
    def skip_upload(self) -> bool:
        return isinstance(self.description, Structured) and self.description.skip_upload is True

    @property
    def comment(self) -> str:
        """Resolved comment; empty when the descriptor carries none."""
        if isinstance(self.description, PlainComment):
            return self.description.text
        if isinstance(self.description, Structured) and self.description.comment is not None:
            return self.description.comment
        return ""


@dataclass(frozen=True)
class CatalogEntry:
    text: str
    comment: str = DEFAULT_COMMENT


Catalog = Dict[str, CatalogEntry]
