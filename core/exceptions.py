"""Custom exceptions for the PDF text extraction pipeline. No generic Exception usage."""

from __future__ import annotations


class TextExtractionError(Exception):
    """Base exception for extraction failures."""

    def __init__(self, message: str, trace_id: str | None = None) -> None:
        self.trace_id = trace_id or ""
        super().__init__(message)


class UnsupportedDocumentError(TextExtractionError, TypeError):
    """Document reference is not a path, a readable stream, or a scoped-open attachment."""

    pass


class PdfParseError(TextExtractionError):
    """Recoverable parser condition; the pipeline falls back to OCR."""

    pass


class MalformedDocumentError(PdfParseError):
    """PDF structure could not be read (bad xref, truncated file, not a PDF)."""

    pass


class UnsupportedFeatureError(PdfParseError):
    """PDF uses a feature the parser backend cannot handle (filters, crypto)."""

    pass


class RasterizationError(TextExtractionError):
    """PDF to image conversion failed."""

    pass


class OCRError(TextExtractionError):
    """OCR extraction failed."""

    pass


class ConfigError(TextExtractionError):
    """Invalid or missing configuration."""

    pass
