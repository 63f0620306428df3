"""Extraction: document resolution, text layer, scan classification, rasterization, OCR engines."""

from extraction.document import DocumentSource, open_document
from extraction.classifier import (
    MIN_LETTER_DENSITY,
    MAX_JUNK_RATIO,
    MIN_DOCUMENT_CHARS,
    is_junk_page,
    is_scanned_like,
    needs_ocr,
)
from extraction.pdf_text import PypdfParser, sample_page_text, extract_direct
from extraction.rasterize import PdfRasterizer
from extraction.ocr import (
    create_ocr_engine,
    create_preprocessor,
    run_engine_on_images,
    BasePreprocessor,
    TesseractEngine,
)

__all__ = [
    "DocumentSource",
    "open_document",
    "MIN_LETTER_DENSITY",
    "MAX_JUNK_RATIO",
    "MIN_DOCUMENT_CHARS",
    "is_junk_page",
    "is_scanned_like",
    "needs_ocr",
    "PypdfParser",
    "sample_page_text",
    "extract_direct",
    "PdfRasterizer",
    "create_ocr_engine",
    "create_preprocessor",
    "run_engine_on_images",
    "BasePreprocessor",
    "TesseractEngine",
]
