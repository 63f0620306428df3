"""Core layer: interfaces, models, exceptions."""

from core.interfaces import (
    IPage,
    IPdfParser,
    IRasterizer,
    IOCREngine,
    IOCRService,
    ILogger,
)
from core.models import (
    ExtractionResult,
    DirectExtraction,
    BatchMetrics,
    OCR_FAILURE_MESSAGE,
)
from core.exceptions import (
    TextExtractionError,
    UnsupportedDocumentError,
    PdfParseError,
    MalformedDocumentError,
    UnsupportedFeatureError,
    RasterizationError,
    OCRError,
    ConfigError,
)

__all__ = [
    "IPage",
    "IPdfParser",
    "IRasterizer",
    "IOCREngine",
    "IOCRService",
    "ILogger",
    "ExtractionResult",
    "DirectExtraction",
    "BatchMetrics",
    "OCR_FAILURE_MESSAGE",
    "TextExtractionError",
    "UnsupportedDocumentError",
    "PdfParseError",
    "MalformedDocumentError",
    "UnsupportedFeatureError",
    "RasterizationError",
    "OCRError",
    "ConfigError",
]
