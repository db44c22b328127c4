# locsync/runner_pkg/ingest.py
"""
Download ingestion for one language: decode, project to id -> text,
enforce the fail-on-empty policy, write <output_path>/<language>.json.
"""

from __future__ import annotations

import json
import os
from typing import Dict

from locsync.config import SyncConfig
from locsync.errors import EmptyCatalogError
from locsync.catalog_pkg import Catalog, decode

__all__ = ["TranslationMap", "project", "write_translations", "ingest"]

TranslationMap = Dict[str, str]


def project(catalog: Catalog) -> TranslationMap:
    return {message_id: entry.text for message_id, entry in catalog.items()}


def write_translations(path: str, translations: TranslationMap) -> None:
    """Replace `path` in one step; a failed write leaves the old file as it was."""
    data = json.dumps(translations, indent=4, ensure_ascii=False).encode("utf-8")

    directory = os.path.dirname(path) or "."
    os.makedirs(directory, exist_ok=True)
    tmp_path = path + ".tmp"
    try:
        with open(tmp_path, "wb") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def ingest(config: SyncConfig, language: str, resource_text: str) -> TranslationMap:
    """
    Returns the map that was written. Raises MalformedResourceError on
    undecodable text and EmptyCatalogError (nothing written) when
    fail_empty is set and no keys came back.
    """
    translations = project(decode(resource_text))
    if config.fail_empty and not translations:
        raise EmptyCatalogError(language)

    write_translations(config.output_file(language), translations)
    return translations
