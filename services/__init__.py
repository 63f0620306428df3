"""Pipeline services: OCR fallback."""

from services.ocr_service import OCRService, scratch_workspace

__all__ = [
    "OCRService",
    "scratch_workspace",
]
