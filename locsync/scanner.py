# locsync/scanner.py
"""
Source scanner: turns the configured file set into descriptor batches.

Two modes:
- no extractors: every matched file is pre-extracted descriptor JSON
  (a list of descriptors, or a `formatjs extract` style {id: {...}} object)
- extractors: each command template runs once per file with `{file}`
  substituted and must print descriptor JSON on stdout

Batches are produced lazily, one per file and extractor, so the merger can
stop pulling at the first conflict.
"""

from __future__ import annotations

import glob
import json
import logging
import os
import shlex
import subprocess
from typing import Any, Iterator, List

from locsync.config import SyncConfig
from locsync.errors import ScanError
from locsync.catalog_pkg.descriptor import MessageDescriptor

logger = logging.getLogger(__name__)

__all__ = ["scan", "matched_files", "descriptors_from_json"]


def matched_files(pattern: str) -> List[str]:
    return sorted(p for p in glob.glob(pattern, recursive=True) if os.path.isfile(p))


def descriptors_from_json(data: Any, path: str) -> List[MessageDescriptor]:
    """
    Accepts:
      - [{"id": ..., "defaultMessage": ..., "description": ...}, ...]
      - {"<id>": {"defaultMessage": ..., "description": ...}, ...}
    """
    if isinstance(data, dict):
        items = []
        for message_id, body in data.items():
            if not isinstance(body, dict):
                raise ScanError(path, f"descriptor {message_id!r} is a {type(body).__name__}, expected an object")
            items.append({"id": message_id, **body})
    elif isinstance(data, list):
        items = data
    else:
        raise ScanError(path, f"expected a list or object of descriptors, got {type(data).__name__}")

    out: List[MessageDescriptor] = []
    for raw in items:
        if not isinstance(raw, dict):
            raise ScanError(path, f"descriptor is a {type(raw).__name__}, expected an object")
        try:
            out.append(MessageDescriptor.from_dict(raw))
        except ValueError as e:
            raise ScanError(path, str(e))
    return out


def _read_descriptor_file(path: str) -> List[MessageDescriptor]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ScanError(path, f"{type(e).__name__}: {e}")
    return descriptors_from_json(data, path)


def _run_extractor(template: str, path: str, timeout: float) -> List[MessageDescriptor]:
    parts = shlex.split(template)
    argv = [part.replace("{file}", path) for part in parts]
    if not any("{file}" in part for part in parts):
        argv.append(path)

    logger.debug("running extractor %s", argv)
    try:
        proc = subprocess.run(argv, capture_output=True, text=True, timeout=timeout)
    except (OSError, subprocess.TimeoutExpired) as e:
        raise ScanError(path, f"extractor {argv[0]!r} failed: {e}")

    if proc.returncode != 0:
        stderr = (proc.stderr or "").strip()[:300]
        raise ScanError(path, f"extractor {argv[0]!r} exited {proc.returncode}: {stderr}")

    output = (proc.stdout or "").strip()
    if not output:
        return []
    try:
        data = json.loads(output)
    except json.JSONDecodeError as e:
        raise ScanError(path, f"extractor {argv[0]!r} printed invalid JSON: {e}")
    return descriptors_from_json(data, path)


def scan(config: SyncConfig) -> Iterator[List[MessageDescriptor]]:
    files = matched_files(config.file_pattern)
    logger.debug("%d files match %s", len(files), config.file_pattern)

    for path in files:
        if not config.extractors:
            yield _read_descriptor_file(path)
            continue
        for template in config.extractors:
            yield _run_extractor(template, path, config.timeout)
