# locsync/errors.py
"""
Error taxonomy for locsync.

Upload errors (scan, merge, transport) abort the whole run.
Download errors are scoped to the language being ingested.
"""

from __future__ import annotations

__all__ = [
    "LocSyncError",
    "ConfigError",
    "ScanError",
    "InvalidDescriptorError",
    "DuplicateIdConflictError",
    "MalformedResourceError",
    "EmptyCatalogError",
    "TransportError",
]


class LocSyncError(Exception):
    """Base class for every error raised by locsync."""


class ConfigError(LocSyncError):
    pass


class ScanError(LocSyncError):
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to extract messages from {path}: {reason}")


class InvalidDescriptorError(LocSyncError, ValueError):
    """A descriptor that cannot enter the catalog (no usable id)."""


class DuplicateIdConflictError(LocSyncError):
    """
    Two descriptors share an id but disagree on text or comment.

    `field` is "defaultMessage" or "description"; `value` is the incoming
    descriptor's value and `existing` the one already in the catalog.
    """

    def __init__(self, message_id: str, field: str, value: str, existing: str):
        self.message_id = message_id
        self.field = field
        self.value = value
        self.existing = existing
        super().__init__(
            f'Duplicate message id "{message_id}", but the `{field}` are different: '
            f'"{value}" != "{existing}".'
        )


class MalformedResourceError(LocSyncError):
    def __init__(self, line: int, reason: str):
        self.line = line
        self.reason = reason
        super().__init__(f"Malformed resource text at line {line}: {reason}")


class EmptyCatalogError(LocSyncError):
    def __init__(self, language: str):
        self.language = language
        super().__init__(f"No localization keys found for {language}")


class TransportError(LocSyncError):
    def __init__(self, url: str, reason: str, status: int | None = None):
        self.url = url
        self.reason = reason
        self.status = status
        prefix = f"HTTP {status}" if status is not None else "Request failed"
        super().__init__(f"{prefix} for {url}: {reason}")
