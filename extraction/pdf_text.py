"""
Extract native text from PDFs (digital/vector PDFs with embedded text).
When a PDF has selectable text, this yields text without OCR.
For image-only (scanned) PDFs the classifier flags the result and the caller falls back to OCR.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, BinaryIO, Iterator

from pypdf import PdfReader
from pypdf.errors import DependencyError, PdfReadError

from core.exceptions import MalformedDocumentError, UnsupportedFeatureError
from core.interfaces import IPage, IPdfParser
from core.models import DirectExtraction
from extraction.classifier import needs_ocr
from extraction.document import DocumentSource
from utils.text_normalize import repair_encoding

logger = logging.getLogger(__name__)


@contextmanager
def _translate_pypdf_errors() -> Iterator[None]:
    """Map pypdf failures onto the two recoverable parser conditions."""
    try:
        yield
    except (DependencyError, NotImplementedError) as e:
        raise UnsupportedFeatureError(f"Unsupported PDF feature: {e}") from e
    except (PdfReadError, ValueError, KeyError) as e:
        raise MalformedDocumentError(f"Malformed PDF: {e}") from e


class PypdfParser(IPdfParser):
    """pypdf backend. Non-strict by default so minor xref damage is repaired instead of raised."""

    def __init__(self, strict: bool = False) -> None:
        self._strict = strict

    def pages(self, data: str | Path | BinaryIO) -> Iterator[IPage]:
        with _translate_pypdf_errors():
            reader = PdfReader(data, strict=self._strict)
            if reader.is_encrypted and not reader.decrypt(""):
                raise UnsupportedFeatureError("Encrypted PDF requires a password")
            pages = reader.pages
            count = len(pages)
        for index in range(count):
            with _translate_pypdf_errors():
                page = pages[index]
            yield page


def sample_page_text(page: IPage) -> str:
    """
    Best-effort text of one page. Undecodable sequences are dropped; any other
    failure yields "" for this page only.
    """
    try:
        text: Any = page.extract_text()
    except Exception as e:
        logger.debug("PDF page text extraction failed: %s", e)
        return ""
    if text is None:
        return ""
    if not isinstance(text, (str, bytes, bytearray)):
        text = str(text)
    return repair_encoding(text)


def extract_direct(source: DocumentSource, parser: IPdfParser) -> DirectExtraction:
    """
    Read the text layer page by page. Stops at the first junk page; afterwards the whole
    accumulated text is re-checked. needs_ocr is set when either check fires.
    Parser errors (MalformedDocumentError / UnsupportedFeatureError) propagate to the caller.
    """
    parts: list[str] = []
    page_count = 0
    for page in parser.pages(source.reader()):
        page_count += 1
        text = sample_page_text(page)
        parts.append(text)
        if needs_ocr(text, scope="page"):
            logger.info("Page %s has no usable text layer; treating document as scanned", page_count)
            return DirectExtraction(" ".join(parts), page_count, needs_ocr=True, reason="junk_page")
    text = " ".join(parts)
    if needs_ocr(text, scope="document"):
        logger.info("Text layer of %s page(s) looks scanned (len=%s)", page_count, len(text))
        return DirectExtraction(text, page_count, needs_ocr=True, reason="scanned_like")
    return DirectExtraction(text, page_count, needs_ocr=False)
