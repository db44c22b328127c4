# locsync/runner_pkg/client.py
"""
Transport: one request, one completed body or a TransportError.

No retries and no backoff; the only bound on a hung call is the configured
timeout. `session` may be a requests.Session or anything with the same
get/post signature (tests inject a fake).
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from locsync.config import SyncConfig
from locsync.errors import TransportError

logger = logging.getLogger(__name__)

__all__ = ["upload_strings", "fetch_strings"]

_FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}


def _read_body(res: requests.Response, url: str) -> str:
    if not 200 <= res.status_code < 300:
        raise TransportError(url, (res.text or "")[:300], status=res.status_code)
    # the service answers in UTF-8 without always declaring it
    res.encoding = "utf-8"
    return res.text or ""


def upload_strings(config: SyncConfig, envelope: str, session: Optional[Any] = None) -> str:
    """POST the envelope to the upload endpoint and return the response body."""
    http = session or requests
    url = config.upload_url()
    logger.debug("POST %s (%d bytes)", url, len(envelope))
    try:
        res = http.post(
            url,
            data=envelope.encode("utf-8"),
            headers=_FORM_HEADERS,
            timeout=config.timeout,
            verify=config.verify_ssl,
        )
    except requests.RequestException as e:
        raise TransportError(url, f"{type(e).__name__}: {e}")
    return _read_body(res, url)


def fetch_strings(config: SyncConfig, language: str, session: Optional[Any] = None) -> str:
    """GET the resource text for one language."""
    http = session or requests
    url = config.download_url(language)
    logger.debug("GET %s", url)
    try:
        res = http.get(url, timeout=config.timeout, verify=config.verify_ssl)
    except requests.RequestException as e:
        raise TransportError(url, f"{type(e).__name__}: {e}")
    return _read_body(res, url)
