# locsync/runner_pkg/__init__.py

from .client import fetch_strings, upload_strings
from .envelope import build_envelope, parse_changes
from .ingest import TranslationMap, ingest, project, write_translations

__all__ = [
    "fetch_strings",
    "upload_strings",
    "build_envelope",
    "parse_changes",
    "TranslationMap",
    "ingest",
    "project",
    "write_translations",
]
