# locsync/cli.py
"""
Command-line entry point.

    locsync upload   --base-url https://l10n.example.com --pid PID168 --group LG725
    locsync download --base-url https://l10n.example.com --pid PID168 --group LG725 \
                     --language de --language fr --output-path src/translations

Exit codes:
  0 = OK
  1 = sync failed (upload aborted, or at least one language failed)
  2 = configuration error
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from locsync.config import load_config
from locsync.errors import ConfigError, LocSyncError
from locsync.runner import run_download, run_upload

EXIT_OK = 0
EXIT_FAIL = 1
EXIT_CONFIG = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="locsync",
        description="Upload source strings to, or download translations from, the localization service.",
    )
    parser.add_argument("command", choices=["upload", "download"])
    parser.add_argument("--config", default=None, help="JSON config file (default data/config.json)")
    parser.add_argument("--base-url", dest="base_url", default=None)
    parser.add_argument("--pid", default=None)
    parser.add_argument("--loc-version", dest="version", default=None)
    parser.add_argument("--group", default=None)
    parser.add_argument("--language", dest="languages", action="append", default=None,
                        help="Target language code (repeatable)")
    parser.add_argument("--upload-language", dest="upload_language", default=None)
    parser.add_argument("--output-path", dest="output_path", default=None)
    parser.add_argument("--fail-empty", dest="fail_empty", action="store_true", default=None,
                        help="Fail a language that comes back without any keys")
    parser.add_argument("--file-pattern", dest="file_pattern", default=None)
    parser.add_argument("--extractor", dest="extractors", action="append", default=None,
                        help="Extractor command template, {file} is replaced by the path (repeatable)")
    parser.add_argument("--timeout", type=float, default=None)
    parser.add_argument("--insecure", dest="verify_ssl", action="store_false", default=None,
                        help="Skip TLS certificate verification")
    return parser


def _setup_logging() -> None:
    level = (os.getenv("LOCSYNC_LOG_LEVEL") or "info").strip().upper()
    if level == "TRACE":
        level = "DEBUG"
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _setup_logging()

    overrides = {k: v for k, v in vars(args).items() if k not in ("command", "config")}
    try:
        config = load_config(args.config, overrides, require_languages=args.command == "download")
    except ConfigError as e:
        print(f"❌ {e}", file=sys.stderr)
        return EXIT_CONFIG

    print(json.dumps(config.describe(), indent=2, ensure_ascii=False))
    print()

    if args.command == "upload":
        try:
            run_upload(config)
        except LocSyncError as e:
            print(f"❌ Upload aborted: {e}", file=sys.stderr)
            return EXIT_FAIL
        return EXIT_OK

    report = run_download(config)
    return EXIT_OK if report.ok else EXIT_FAIL


if __name__ == "__main__":
    raise SystemExit(main())
