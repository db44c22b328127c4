# locsync/catalog_pkg/__init__.py
"""
Catalog engine: descriptor model, merger and resource codec.

Public API:
  - MessageDescriptor, PlainComment, Structured, CatalogEntry, Catalog
  - merge, merge_or_raise, MergeResult
  - encode, decode
"""

from __future__ import annotations

from .descriptor import (
    DEFAULT_COMMENT,
    Catalog,
    CatalogEntry,
    MessageDescriptor,
    PlainComment,
    Structured,
)
from .merger import MergeResult, merge, merge_or_raise
from .codec import decode, encode

__all__ = [
    "DEFAULT_COMMENT",
    "Catalog",
    "CatalogEntry",
    "MessageDescriptor",
    "PlainComment",
    "Structured",
    "MergeResult",
    "merge",
    "merge_or_raise",
    "encode",
    "decode",
]
