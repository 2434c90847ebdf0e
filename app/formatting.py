"""
Core formatting logic.

Responsibilities:
- split pasted text on newlines and commas
- trim items and drop blank segments
- wrap each item in the selected quote character and join for a SQL IN (...) list
- decode uploaded text files before formatting

Quote characters inside an item are emitted as-is. Escaping them would change
the output users paste into their queries.
"""

from __future__ import annotations

import hashlib
import logging
import re
from typing import Any, Dict, List, Tuple, Union

from charset_normalizer import from_bytes

from .models import QuoteStyle
from .rules import DELIMITERS, JOIN_SEPARATOR, OUTPUT_ENCODING, QUOTE_CHARS, TRIM_CHARS

logger = logging.getLogger(__name__)

_SPLIT_RE = re.compile("[" + re.escape("".join(DELIMITERS)) + "]")


def sha256_hex(text: str) -> str:
    return hashlib.sha256(text.encode(OUTPUT_ENCODING)).hexdigest()


def quote_char(quote: Union[QuoteStyle, str]) -> str:
    """Return the wrapping character for ``quote``."""
    key = quote.value if isinstance(quote, QuoteStyle) else quote
    try:
        return QUOTE_CHARS[key]
    except (KeyError, TypeError):
        raise ValueError(f"Unsupported quote style: {quote!r}") from None


def _trim(piece: str) -> str:
    return piece.strip(TRIM_CHARS)


def _segments(raw: str) -> List[str]:
    if not _trim(raw):
        return []
    return [_trim(piece) for piece in _SPLIT_RE.split(raw)]


def split_items(raw: str) -> List[str]:
    """
    Split raw text into trimmed, non-empty items.

    Newlines and commas are interchangeable delimiters, so a line may hold
    several comma separated items. Order of appearance is kept.
    """
    return [piece for piece in _segments(raw) if piece]


def _render(items: List[str], q: str) -> str:
    return JOIN_SEPARATOR.join(f"{q}{item}{q}" for item in items)


def format_strings(raw: str, quote: QuoteStyle) -> Tuple[str, int]:
    """
    Format pasted identifiers for a SQL IN clause.

    Returns the quoted, comma-joined items and the number of items.
    Whitespace-only input gives ("", 0).
    """
    items = split_items(raw)
    return _render(items, quote_char(quote)), len(items)


def format_with_report(raw: str, quote: QuoteStyle) -> Tuple[str, int, Dict[str, Any]]:
    """
    Same as format_strings, plus a report describing the run.

    The report counts delimiters seen and blank segments dropped, and carries
    one warning per item that contains the quote character.
    """
    q = quote_char(quote)
    formatted, count = format_strings(raw, quote)
    warnings: List[Dict[str, Any]] = []

    delimiters = {
        "newline": raw.count("\n"),
        "comma": raw.count(","),
    }

    segments = _segments(raw)
    items = [piece for piece in segments if piece]
    dropped = len(segments) - len(items)

    for i, item in enumerate(items):
        if q in item:
            warnings.append({
                "item": i + 1,
                "issue": "embedded_quote",
                "value": item,
                "action": "left_unescaped",
            })

    logger.debug(
        "formatted %d items (%d blank segments dropped, %d embedded quotes)",
        count, dropped, len(warnings),
    )

    report = {
        "segments": len(segments),
        "blank_segments_dropped": dropped,
        "delimiters": delimiters,
        "warnings": warnings,
    }
    return formatted, count, report


def decode_text_bytes(raw: bytes) -> Tuple[str, Dict[str, Any]]:
    """
    Decode an uploaded text file.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - A UTF-8 BOM is consumed, never passed on as part of the first item.
    - If decode fails, fall back to UTF-8, then to UTF-8 with replacement
      characters, and report it.
    """
    detected = None

    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or "utf-8"
    if raw.startswith(b"\xef\xbb\xbf") and (decode_used.lower().replace("-", "_") in ("utf_8", "utf8")):
        decode_used = "utf-8-sig"

    decode_fallback = False

    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        decode_fallback = True
        try:
            text = raw.decode("utf-8-sig")
            decode_used = "utf-8-sig"
        except UnicodeDecodeError:
            text = raw.decode("utf-8", errors="replace")
            decode_used = "utf-8"

    if text.startswith("\ufeff"):
        text = text[1:]

    if decode_fallback:
        logger.warning("upload decode fell back to %s (detected %s)", decode_used, detected)
    else:
        logger.info("upload decoded as %s", decode_used)

    return text, {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
    }
