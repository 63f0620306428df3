"""
Text normalization for extracted PDF/OCR text: one clean block of single-spaced text.
Line wraps become spaces and hyphenated line breaks are joined back into words.
"""

from __future__ import annotations

import re

_NEWLINES = re.compile(r"\n+")
_WHITESPACE = re.compile(r"\s+")
_HYPHEN_BREAK = re.compile(r"-\s+")


def repair_encoding(text: str | bytes) -> str:
    """
    Return valid UTF-8 text. Undecodable bytes and lone surrogates are dropped.
    """
    if isinstance(text, (bytes, bytearray)):
        return bytes(text).decode("utf-8", errors="ignore")
    return text.encode("utf-8", errors="ignore").decode("utf-8")


def normalize_text(text: str | bytes) -> str:
    """
    Collapse newlines and whitespace runs to single spaces, remove "-" + whitespace
    (de-hyphenate wrapped words), and strip. Idempotent.
    Encoding repair runs first so dropped characters never leave double spaces.
    """
    if not text:
        return ""
    text = repair_encoding(text)
    text = _NEWLINES.sub(" ", text)
    text = _WHITESPACE.sub(" ", text)
    text = _HYPHEN_BREAK.sub("", text)
    return text.strip()
