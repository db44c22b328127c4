# locsync/catalog_pkg/codec.py
"""
Resource codec for the localized-strings text format used on the wire.

    /* shown on load */
    "GREETING" = "Hello";

Encoding escapes whatever is structural in the format so decoding is exact:
- quoted strings: backslash, double quote, \\n, \\r, \\t
- comments: backslash, \\n, \\r and the terminator "*/" (written "*\\/")

Decoding is line oriented and tolerant of blank lines and indentation.
A comment block or `//` line directly above an entry becomes its comment.
Anything it cannot read raises MalformedResourceError with the 1-based line.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from locsync.errors import MalformedResourceError
from .descriptor import DEFAULT_COMMENT, Catalog, CatalogEntry

__all__ = ["encode", "decode", "escape_string", "escape_comment"]


_STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

_UNESCAPES = {
    "\\": "\\",
    '"': '"',
    "'": "'",
    "/": "/",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


def escape_string(value: str) -> str:
    return "".join(_STRING_ESCAPES.get(ch, ch) for ch in value)


def escape_comment(value: str) -> str:
    out = value.replace("\\", "\\\\").replace("\n", "\\n").replace("\r", "\\r")
    return out.replace("*/", "*\\/")


_HEX = "0123456789abcdefABCDEF"


def _read_hex4(value: str, i: int) -> Optional[int]:
    """Code unit of a `\\uXXXX` / `\\UXXXX` escape starting at value[i], else None."""
    if value[i:i + 2] not in ("\\u", "\\U"):
        return None
    digits = value[i + 2:i + 6]
    if len(digits) == 4 and all(c in _HEX for c in digits):
        return int(digits, 16)
    return None


def _unescape(value: str, lineno: int) -> str:
    if "\\" not in value:
        return value

    out: List[str] = []
    i = 0
    n = len(value)
    while i < n:
        ch = value[i]
        if ch != "\\" or i + 1 >= n:
            out.append(ch)
            i += 1
            continue

        unit = _read_hex4(value, i)
        if unit is not None:
            i += 6
            if 0xD800 <= unit <= 0xDBFF:
                low = _read_hex4(value, i)
                if low is None or not 0xDC00 <= low <= 0xDFFF:
                    raise MalformedResourceError(lineno, f"unpaired surrogate \\u{unit:04X}")
                unit = 0x10000 + ((unit - 0xD800) << 10) + (low - 0xDC00)
                i += 6
            elif 0xDC00 <= unit <= 0xDFFF:
                raise MalformedResourceError(lineno, f"unpaired surrogate \\u{unit:04X}")
            out.append(chr(unit))
            continue

        # unknown escapes keep the escaped character
        out.append(_UNESCAPES.get(value[i + 1], value[i + 1]))
        i += 2
    return "".join(out)


# ---------- encode ----------

def encode(catalog: Catalog) -> str:
    """Render a catalog; entries keep the catalog's iteration order."""
    lines: List[str] = []
    for message_id, entry in catalog.items():
        if entry.comment and entry.comment != DEFAULT_COMMENT:
            lines.append(f"/* {escape_comment(entry.comment)} */")
        lines.append(f'"{escape_string(message_id)}" = "{escape_string(entry.text)}";')
        lines.append("")
    return "\n".join(lines)


# ---------- decode ----------

def _read_quoted(line: str, pos: int, lineno: int) -> Tuple[str, int]:
    """Read a quoted string starting at line[pos] == '"'. Returns (raw, next_pos)."""
    i = pos + 1
    n = len(line)
    while i < n:
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch == '"':
            return line[pos + 1:i], i + 1
        i += 1
    raise MalformedResourceError(lineno, "unterminated string")


def _skip_ws(line: str, pos: int) -> int:
    while pos < len(line) and line[pos] in " \t":
        pos += 1
    return pos


def _parse_entries(line: str, lineno: int) -> List[Tuple[str, str]]:
    """Parse one or more `"key" = "value";` entries from a single line."""
    entries: List[Tuple[str, str]] = []
    pos = 0
    n = len(line)

    while True:
        pos = _skip_ws(line, pos)
        if pos >= n or line[pos] != '"':
            raise MalformedResourceError(lineno, "expected a quoted key")
        key, pos = _read_quoted(line, pos, lineno)

        pos = _skip_ws(line, pos)
        if pos >= n or line[pos] != "=":
            raise MalformedResourceError(lineno, "missing '=' after key")
        pos = _skip_ws(line, pos + 1)
        if pos >= n or line[pos] != '"':
            raise MalformedResourceError(lineno, "expected a quoted value")
        value, pos = _read_quoted(line, pos, lineno)

        pos = _skip_ws(line, pos)
        if pos >= n or line[pos] != ";":
            raise MalformedResourceError(lineno, "missing semicolon")
        entries.append((_unescape(key, lineno), _unescape(value, lineno)))

        pos = _skip_ws(line, pos + 1)
        rest = line[pos:]
        if not rest or rest.startswith("//"):
            return entries
        if rest.startswith("/*") and rest.endswith("*/"):
            return entries
        if rest.startswith('"'):
            continue
        raise MalformedResourceError(lineno, f"unexpected text after entry: {rest[:40]!r}")


def _inline_comment(body: str, lineno: int) -> str:
    # encode() pads with exactly one space on each side
    if body.startswith(" "):
        body = body[1:]
    if body.endswith(" "):
        body = body[:-1]
    return _unescape(body, lineno)


def _resolve_comment(comment: Optional[str]) -> str:
    if not comment:
        return DEFAULT_COMMENT
    return comment


def decode(text: str) -> Catalog:
    """
    Parse resource text into a catalog. A later duplicate key replaces the
    earlier one.
    """
    catalog: Catalog = {}
    pending: Optional[str] = None

    block: Optional[List[str]] = None
    block_start = 0

    if text.startswith("\ufeff"):
        text = text[1:]

    # split on "\n" only; other Unicode line breaks are ordinary text here
    for lineno, raw in enumerate(text.split("\n"), start=1):
        if block is not None:
            end = raw.find("*/")
            if end == -1:
                block.append(raw.rstrip("\r"))
                continue
            block.append(raw[:end])
            pending = _unescape("\n".join(block).strip(), block_start)
            block = None
            line = raw[end + 2:].strip()
        else:
            line = raw.strip()

        if not line:
            continue

        if line.startswith("//"):
            pending = _unescape(line[2:].strip(), lineno)
            continue

        if line.startswith("/*"):
            end = line.find("*/", 2)
            if end == -1:
                block = [line[2:]]
                block_start = lineno
                continue
            pending = _inline_comment(line[2:end], lineno)
            line = line[end + 2:].strip()
            if not line or line.startswith("//"):
                continue

        if not line.startswith('"'):
            raise MalformedResourceError(lineno, f"unexpected text: {line[:40]!r}")

        for key, value in _parse_entries(line, lineno):
            catalog[key] = CatalogEntry(text=value, comment=_resolve_comment(pending))
            pending = None

    if block is not None:
        raise MalformedResourceError(block_start, "unterminated comment")

    return catalog
