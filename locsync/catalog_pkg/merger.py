# locsync/catalog_pkg/merger.py
"""
Fold scanner batches into one canonical catalog.

Rules:
- Descriptors flagged skipUpload are dropped before anything else.
- A repeated id must agree on defaultMessage and on the resolved comment.
  The first disagreement stops the merge and is returned as the conflict.
- Comments are compared as resolved (empty when absent); the single-space
  default is applied only when the final entries are built.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from locsync.errors import DuplicateIdConflictError
from .descriptor import DEFAULT_COMMENT, Catalog, CatalogEntry, MessageDescriptor

logger = logging.getLogger(__name__)

__all__ = ["MergeResult", "merge", "merge_or_raise"]

DescriptorLike = Union[MessageDescriptor, Mapping[str, Any]]


@dataclass(frozen=True)
class MergeResult:
    """
    Outcome of a merge: exactly one of `catalog` / `conflict` is set.
    `skipped` counts descriptors dropped by the skipUpload flag.
    """
    catalog: Optional[Catalog] = None
    conflict: Optional[DuplicateIdConflictError] = None
    skipped: int = 0

    @property
    def ok(self) -> bool:
        return self.conflict is None

    @property
    def count(self) -> int:
        return len(self.catalog) if self.catalog is not None else 0

    def unwrap(self) -> Catalog:
        if self.conflict is not None:
            raise self.conflict
        return self.catalog if self.catalog is not None else {}


def _coerce(item: DescriptorLike) -> MessageDescriptor:
    if isinstance(item, MessageDescriptor):
        return item
    return MessageDescriptor.from_dict(dict(item))


def _check(
    seen: Dict[str, Tuple[str, str]],
    descriptor: MessageDescriptor,
) -> Optional[DuplicateIdConflictError]:
    existing = seen.get(descriptor.id)
    if existing is None:
        return None

    existing_text, existing_comment = existing
    if descriptor.default_message != existing_text:
        return DuplicateIdConflictError(
            descriptor.id, "defaultMessage", descriptor.default_message, existing_text
        )
    if descriptor.comment != existing_comment:
        return DuplicateIdConflictError(
            descriptor.id, "description", descriptor.comment, existing_comment
        )
    return None


def merge(batches: Iterable[Iterable[DescriptorLike]]) -> MergeResult:
    """
    Consume `batches` once (one batch per scanned file and extractor) and
    return a MergeResult. Fail-fast: later batches are not pulled after a
    conflict.
    """
    seen: Dict[str, Tuple[str, str]] = {}
    skipped = 0

    for batch in batches:
        for item in batch or ():
            descriptor = _coerce(item)

            if descriptor.skip_upload:
                skipped += 1
                logger.debug("skipping %r (skipUpload)", descriptor.id)
                continue

            conflict = _check(seen, descriptor)
            if conflict is not None:
                logger.debug("conflict on %r: %s", descriptor.id, conflict)
                return MergeResult(conflict=conflict, skipped=skipped)

            seen[descriptor.id] = (descriptor.default_message, descriptor.comment)

    catalog: Catalog = {
        message_id: CatalogEntry(text=text, comment=comment or DEFAULT_COMMENT)
        for message_id, (text, comment) in seen.items()
    }
    return MergeResult(catalog=catalog, skipped=skipped)


def merge_or_raise(batches: Iterable[Iterable[DescriptorLike]]) -> Catalog:
    return merge(batches).unwrap()
