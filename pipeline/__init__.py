"""Pipeline: single-document and batch extraction."""

from pipeline.text_pipeline import TextExtractionPipeline, build_ocr_service, extract
from pipeline.batch_processor import BatchProcessor

__all__ = [
    "TextExtractionPipeline",
    "build_ocr_service",
    "extract",
    "BatchProcessor",
]
