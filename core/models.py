"""
Data models for the extraction pipeline.
Uses dataclasses for DTOs; to_dict() gives the stable public result shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

OCR_FAILURE_MESSAGE = "Unable to extract text using OCR"

SOURCE_PDF_TEXT = "pdf_text"
SOURCE_OCR = "ocr"


@dataclass(frozen=True)
class ExtractionResult:
    """Outcome of one extraction: either raw_text (success) or message (failure)."""

    success: bool
    raw_text: str | None = None
    message: str | None = None
    source: str = ""  # "pdf_text" | "ocr"
    page_count: int = 0

    def __post_init__(self) -> None:
        if self.success and self.raw_text is None:
            raise ValueError("successful result requires raw_text")
        if not self.success and self.raw_text is not None:
            raise ValueError("failed result cannot carry raw_text")

    @classmethod
    def ok(cls, raw_text: str, *, source: str, page_count: int = 0) -> ExtractionResult:
        return cls(success=True, raw_text=raw_text, source=source, page_count=page_count)

    @classmethod
    def failure(cls, message: str, *, source: str = "", page_count: int = 0) -> ExtractionResult:
        return cls(success=False, message=message, source=source, page_count=page_count)

    def to_dict(self) -> dict[str, Any]:
        """Stable public shape: {"success", "raw_text"} or {"success", "message"}."""
        if self.success:
            return {"success": True, "raw_text": self.raw_text}
        return {"success": False, "message": self.message}


@dataclass(frozen=True)
class DirectExtraction:
    """Result of the text-layer pass over all pages."""

    text: str
    page_count: int
    needs_ocr: bool
    reason: str = ""  # "junk_page" | "scanned_like" | ""


@dataclass
class BatchMetrics:
    """Metrics collected during batch processing."""

    total_processed: int = 0
    pdf_text_count: int = 0
    ocr_count: int = 0
    failed_count: int = 0
    total_time_sec: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Export for logging/serialization."""
        return {
            "total_processed": self.total_processed,
            "pdf_text_count": self.pdf_text_count,
            "ocr_count": self.ocr_count,
            "failed_count": self.failed_count,
            "total_time_sec": round(self.total_time_sec, 4),
        }
