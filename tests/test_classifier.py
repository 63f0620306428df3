"""
Unit tests for scan classification: per-page junk judgment and whole-document scan judgment.
"""
from __future__ import annotations

import pytest

from extraction.classifier import (
    MAX_JUNK_RATIO,
    MIN_DOCUMENT_CHARS,
    MIN_LETTER_DENSITY,
    is_junk_page,
    is_scanned_like,
    junk_ratio,
    needs_ocr,
)


def test_thresholds_are_fixed() -> None:
    assert MIN_LETTER_DENSITY == 0.2
    assert MAX_JUNK_RATIO == 0.5
    assert MIN_DOCUMENT_CHARS == 100


@pytest.mark.parametrize("text", ["", "   ", "\n\t \n"])
def test_empty_or_blank_page_is_junk(text: str) -> None:
    assert is_junk_page(text) is True


def test_letter_density_boundary() -> None:
    """Exactly 20% letters is not junk; one letter fewer is."""
    assert is_junk_page("ab" + "1" * 8) is False
    assert is_junk_page("a" + "1" * 9) is True
    assert is_junk_page("x" * 20 + "." * 80) is False
    assert is_junk_page("x" * 19 + "." * 81) is True


def test_non_latin_letters_do_not_count() -> None:
    assert is_junk_page("ÄÖÜßéèà" * 5) is True


def test_scanned_like_on_length() -> None:
    assert is_scanned_like("") is True
    assert is_scanned_like("a" * 99) is True
    assert is_scanned_like("a" * 100) is False


def test_scanned_like_on_junk_ratio() -> None:
    """More than half of the characters outside [A-Za-z0-9\\s] marks the text as scanned."""
    assert is_scanned_like("a" * 50 + "#" * 50) is False
    assert is_scanned_like("a" * 49 + "#" * 51) is True
    assert is_scanned_like("word " * 40) is False


def test_whitespace_and_digits_are_not_junk() -> None:
    assert junk_ratio("12 34\n56\tab") == 0.0
    assert junk_ratio("") == 1.0


def test_classification_is_deterministic() -> None:
    samples = ["", "Invoice Total: 42.00", "§§§ ¶¶ ©" * 20, "The quick brown fox " * 10]
    first = [is_scanned_like(s) for s in samples]
    for _ in range(3):
        assert [is_scanned_like(s) for s in samples] == first
        assert [is_scanned_like(s) for s in samples] == [True, True, True, False]


def test_gate_dispatches_by_scope() -> None:
    short_but_clean = "Hello world"
    assert needs_ocr(short_but_clean, scope="page") is False
    assert needs_ocr(short_but_clean, scope="document") is True
    with pytest.raises(ValueError):
        needs_ocr("x", scope="chapter")  # type: ignore[arg-type]
