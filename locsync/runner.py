# locsync/runner.py

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Tuple

from locsync.config import SyncConfig
from locsync.errors import LocSyncError
from locsync.scanner import scan
from locsync.catalog_pkg import encode, merge
from locsync.runner_pkg import (
    build_envelope,
    fetch_strings,
    ingest,
    parse_changes,
    upload_strings,
)


def _log_level() -> str:
    v = (os.getenv("LOCSYNC_LOG_LEVEL") or "").strip().lower()
    return v or "info"


def _debug_enabled() -> bool:
    return _log_level() in ("debug", "trace")


@dataclass
class UploadReport:
    message_count: int
    skipped: int
    changes: List[str] = field(default_factory=list)


@dataclass
class DownloadReport:
    written: List[Tuple[str, str, int]] = field(default_factory=list)   # (language, path, count)
    failed: List[Tuple[str, str]] = field(default_factory=list)         # (language, error)

    @property
    def ok(self) -> bool:
        return not self.failed


def run_upload(
    config: SyncConfig,
    batches: Optional[Iterable[Iterable[Any]]] = None,
    session: Optional[Any] = None,
) -> UploadReport:
    """
    scan -> merge -> encode -> envelope -> POST.
    Any LocSyncError aborts the run before anything is sent.
    """
    if batches is None:
        print(f"🔍 Extracting messages from {config.file_pattern}…")
        batches = scan(config)

    result = merge(batches)
    catalog = result.unwrap()
    print(f"📦 Found {result.count} messages.")
    if result.skipped and _debug_enabled():
        print(f"⏩ Skipped {result.skipped} descriptors flagged skipUpload.")

    envelope = build_envelope(encode(catalog))

    print(f"📤 Uploading to {config.upload_url()}")
    body = upload_strings(config, envelope, session=session)

    changes = parse_changes(body)
    print("Changes: ")
    for change in changes:
        print(f"  • {change}")
    print("✅ Upload complete.")

    return UploadReport(message_count=result.count, skipped=result.skipped, changes=changes)


def download_language(config: SyncConfig, language: str, session: Optional[Any] = None) -> Tuple[str, int]:
    print(f"📥 Loading translations for {language}…")
    text = fetch_strings(config, language, session=session)
    translations = ingest(config, language, text)
    path = config.output_file(language)
    print(f"✅ Written {len(translations)} messages to {path}.")
    return path, len(translations)


def run_download(config: SyncConfig, session: Optional[Any] = None) -> DownloadReport:
    """
    One independent pass per language. A failing language is reported and
    the loop moves on; the report says which ones failed.
    """
    report = DownloadReport()
    total = len(config.languages)

    for index, language in enumerate(config.languages, start=1):
        if _debug_enabled():
            print(f"🔍 [{index}/{total}] {config.download_url(language)}")

        try:
            path, count = download_language(config, language, session=session)
        except LocSyncError as e:
            print(f"❌ {language}: {e}")
            report.failed.append((language, str(e)))
            continue
        except (OSError, UnicodeError) as e:
            print(f"❌ {language}: failed to write translations ({type(e).__name__}: {e})")
            report.failed.append((language, f"{type(e).__name__}: {e}"))
            continue

        report.written.append((language, path, count))

    if report.failed:
        print(f"ℹ️ Run summary: {len(report.written)}/{total} languages written, {len(report.failed)} failed.")
    else:
        print(f"ℹ️ Run summary: {len(report.written)}/{total} languages written.")

    return report
