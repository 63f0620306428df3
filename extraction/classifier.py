"""
Scan classification: decide from text alone whether a PDF (or one page) has a usable text layer.
Pure functions; thresholds are fixed module constants.
"""
from __future__ import annotations

import re
from typing import Literal

# A page is junk when fewer than 20% of its characters are Latin letters.
MIN_LETTER_DENSITY = 0.2
# A document is scanned-like when more than half its characters are outside [A-Za-z0-9\s].
MAX_JUNK_RATIO = 0.5
# ...or when it has fewer characters than this.
MIN_DOCUMENT_CHARS = 100

_LETTER = re.compile(r"[A-Za-z]")
_NON_ALNUM = re.compile(r"[^A-Za-z0-9\s]")

Scope = Literal["page", "document"]


def letter_count(text: str) -> int:
    return len(_LETTER.findall(text))


def junk_ratio(text: str) -> float:
    """Share of characters outside [A-Za-z0-9\\s]. 1.0 for empty text."""
    if not text:
        return 1.0
    return len(_NON_ALNUM.findall(text)) / len(text)


def is_junk_page(text: str) -> bool:
    """True if the page has no text or its letter density is below MIN_LETTER_DENSITY."""
    if not text or not text.strip():
        return True
    return letter_count(text) < len(text) * MIN_LETTER_DENSITY


def is_scanned_like(text: str) -> bool:
    """True if accumulated document text looks like it came from a scanned (image-only) PDF."""
    if not text:
        return True
    return junk_ratio(text) > MAX_JUNK_RATIO or len(text) < MIN_DOCUMENT_CHARS


def needs_ocr(text: str, *, scope: Scope) -> bool:
    """Classification gate shared by the per-page short-circuit and the whole-document re-check."""
    if scope == "page":
        return is_junk_page(text)
    if scope == "document":
        return is_scanned_like(text)
    raise ValueError(f"Unknown scope: {scope!r}")
