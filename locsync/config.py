# locsync/config.py
"""
Sync configuration.

Sources, lowest to highest precedence:
  1) data/config.json (or the file named by LOCSYNC_CONFIG)
  2) LOCSYNC_* environment variables
  3) explicit overrides (command-line flags)

The result is a frozen SyncConfig handed to every stage; nothing here is
module-level mutable state.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Mapping, Optional, Tuple

from locsync.errors import ConfigError

# Path to config.json in /data/
DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), '..', 'data', 'config.json')

# ---------- Bounds & defaults ----------
_DEFAULT_TIMEOUT = 30.0
_MIN_TIMEOUT = 1.0
_MAX_TIMEOUT = 300.0

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

# config key -> environment variable
_ENV_KEYS = {
    "base_url": "LOCSYNC_BASE_URL",
    "pid": "LOCSYNC_PID",
    "version": "LOCSYNC_VERSION",
    "group": "LOCSYNC_GROUP",
    "languages": "LOCSYNC_LANGUAGES",
    "upload_language": "LOCSYNC_UPLOAD_LANGUAGE",
    "output_path": "LOCSYNC_OUTPUT_PATH",
    "fail_empty": "LOCSYNC_FAIL_EMPTY",
    "file_pattern": "LOCSYNC_FILE_PATTERN",
    "timeout": "LOCSYNC_TIMEOUT",
    "verify_ssl": "LOCSYNC_VERIFY_SSL",
}


@dataclass(frozen=True)
class SyncConfig:
    base_url: str
    pid: str
    group: str
    version: str = "1.0"
    languages: Tuple[str, ...] = ()
    upload_language: str = "en"
    output_path: str = "src/translations"
    fail_empty: bool = False
    file_pattern: str = "src/**/*.json"
    extractors: Tuple[str, ...] = ()
    timeout: float = _DEFAULT_TIMEOUT
    verify_ssl: bool = True
    source: Optional[str] = field(default=None, compare=False)

    def upload_url(self) -> str:
        return (
            f"{self.base_url}/uploadStrings.php?pid={self.pid}&version={self.version}"
            f"&groupID={self.group}&language={self.upload_language}"
        )

    def download_url(self, language: str) -> str:
        return (
            f"{self.base_url}/getStrings.php?pid={self.pid}&version={self.version}"
            f"&group={self.group}&lang={language}"
        )

    def output_file(self, language: str) -> str:
        return os.path.join(self.output_path, f"{language}.json")

    def describe(self) -> Dict[str, Any]:
        """Effective settings, for the startup dump."""
        out = asdict(self)
        out.pop("source", None)
        out["languages"] = list(self.languages)
        out["extractors"] = list(self.extractors)
        out["upload_url"] = self.upload_url()
        out["download_url"] = self.download_url("<lang>")
        return out


# ---------- coercion helpers ----------

def _as_list(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(p.strip() for p in value.replace(",", " ").split() if p.strip())
    try:
        return tuple(str(v).strip() for v in value if str(v).strip())
    except TypeError:
        raise ConfigError(f"Expected a list, got {type(value).__name__}")


def _as_list_keep_spaces(value: Any) -> Tuple[str, ...]:
    # extractor commands contain spaces; only a list (or one string) is accepted
    if value is None:
        return ()
    if isinstance(value, str):
        return (value.strip(),) if value.strip() else ()
    return tuple(str(v).strip() for v in value if str(v).strip())


def _as_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    raw = str(value).strip().lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY or raw == "":
        return False
    raise ConfigError(f"Invalid boolean for {key}: {value!r}")


def _as_timeout(value: Any) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid timeout: {value!r}")
    return max(_MIN_TIMEOUT, min(_MAX_TIMEOUT, v))


def _read_file(path: str, required: bool) -> Dict[str, Any]:
    if not os.path.exists(path):
        if required:
            raise ConfigError(f"Config file not found: {path}")
        return {}

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to read {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"{path} contained a {type(data).__name__}, expected an object")
    return data


def _from_env(environ: Mapping[str, str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, env_name in _ENV_KEYS.items():
        raw = (environ.get(env_name) or "").strip()
        if raw:
            out[key] = raw
    return out


def load_config(
    path: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    require_languages: bool = False,
) -> SyncConfig:
    """
    Merge file, environment and overrides into a SyncConfig.

    `overrides` entries set to None are ignored, so argparse namespaces can be
    passed through as-is. Raises ConfigError on missing or invalid values.
    """
    environ = os.environ if environ is None else environ

    explicit = path or environ.get("LOCSYNC_CONFIG")
    config_path = explicit or DEFAULT_CONFIG_PATH
    merged: Dict[str, Any] = _read_file(config_path, required=bool(explicit))
    merged.update(_from_env(environ))
    merged.update({k: v for k, v in (overrides or {}).items() if v is not None})

    base_url = str(merged.get("base_url") or "").strip().rstrip("/")
    if not base_url:
        raise ConfigError("Missing base URL")

    pid = str(merged.get("pid") or "").strip()
    if not pid:
        raise ConfigError("Missing PID")

    group = str(merged.get("group") or "").strip()
    if not group:
        raise ConfigError("Missing group")

    languages = _as_list(merged.get("languages"))
    if require_languages and not languages:
        raise ConfigError("Missing language")

    return SyncConfig(
        base_url=base_url,
        pid=pid,
        group=group,
        version=str(merged.get("version") or "1.0"),
        languages=languages,
        upload_language=str(merged.get("upload_language") or "en"),
        output_path=str(merged.get("output_path") or "src/translations"),
        fail_empty=_as_bool(merged.get("fail_empty", False), "fail_empty"),
        file_pattern=str(merged.get("file_pattern") or "src/**/*.json"),
        extractors=_as_list_keep_spaces(merged.get("extractors")),
        timeout=_as_timeout(merged.get("timeout", _DEFAULT_TIMEOUT)),
        verify_ssl=_as_bool(merged.get("verify_ssl", True), "verify_ssl"),
        source=config_path if os.path.exists(config_path) else None,
    )

