# locsync/runner_pkg/envelope.py
"""
Upload envelope: the framing the localization service expects around the
resource text, and the change summary it sends back.

Wire contract (do not alter):
    file=BEGIN\\n<base64 of the UTF-8 resource text>\\nEND
"""

from __future__ import annotations

import base64
from typing import List

__all__ = ["ENVELOPE_PREFIX", "ENVELOPE_SUFFIX", "CHANGE_SEPARATOR", "build_envelope", "parse_changes"]

ENVELOPE_PREFIX = "file=BEGIN\n"
ENVELOPE_SUFFIX = "\nEND"
CHANGE_SEPARATOR = "<br><br>"


def build_envelope(resource_text: str) -> str:
    body = base64.b64encode(resource_text.encode("utf-8")).decode("ascii")
    return ENVELOPE_PREFIX + body + ENVELOPE_SUFFIX


def parse_changes(response_body: str) -> List[str]:
    """Drop the preamble segment; whatever follows is reported as-is."""
    if not response_body:
        return []
    return response_body.split(CHANGE_SEPARATOR)[1:]
