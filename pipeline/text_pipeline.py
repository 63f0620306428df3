"""
Text extraction pipeline: single public method extract(document) -> ExtractionResult.
Does not know which parser/OCR backend is used; collaborators injected via constructor.
Flow: resolve document -> text layer pass -> (scanned or parse error) OCR fallback -> normalized result.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

from core.exceptions import PdfParseError
from core.interfaces import ILogger, IOCRService, IPdfParser
from core.models import SOURCE_PDF_TEXT, ExtractionResult
from extraction.document import DocumentSource, open_document
from extraction.ocr import create_ocr_engine
from extraction.pdf_text import PypdfParser, extract_direct
from extraction.rasterize import PdfRasterizer
from services.ocr_service import OCRService
from utils.config import AppConfig
from utils.text_normalize import normalize_text

logger = logging.getLogger(__name__)


def build_ocr_service(config: AppConfig, log: ILogger | None = None) -> OCRService:
    """OCR path wired from config: pdf2image rasterizer + configured engine."""
    ocr = config.ocr
    engine = create_ocr_engine(
        ocr.engine,
        language=ocr.language,
        config=ocr.tesseract_config,
        preprocessor_kind=ocr.preprocessor,
    )
    return OCRService(
        engine,
        PdfRasterizer(dpi=ocr.dpi),
        scratch_dir=config.scratch_dir or None,
        max_workers=ocr.max_workers,
        log=log,
    )


class TextExtractionPipeline:
    """
    extract(document) -> ExtractionResult. Stateless between calls; all deps injected.
    Only UnsupportedDocumentError escapes extract(); parse errors and empty OCR become results.
    """

    def __init__(
        self,
        ocr_service: IOCRService,
        parser: IPdfParser | None = None,
        *,
        log: ILogger | None = None,
    ) -> None:
        self._ocr = ocr_service
        self._parser = parser or PypdfParser()
        self._log = log or logger

    @classmethod
    def from_config(cls, config: AppConfig | None = None, *, log: ILogger | None = None) -> TextExtractionPipeline:
        config = config or AppConfig()
        return cls(build_ocr_service(config, log), PypdfParser(), log=log)

    def _fallback(self, source: DocumentSource, trace_id: str) -> ExtractionResult:
        result = self._ocr.extract(source, trace_id=trace_id)
        logger.info("[%s] OCR fallback %s", trace_id, "succeeded" if result.success else "found no text")
        return result

    def extract(self, document: Any) -> ExtractionResult:
        """
        document: path (str / PathLike), open binary stream, or attachment with open().
        Raises UnsupportedDocumentError for anything else, before parsing.
        """
        trace_id = uuid.uuid4().hex[:12]
        with open_document(document) as source:
            try:
                direct = extract_direct(source, self._parser)
            except PdfParseError as e:
                self._log.warning("[%s] PDF parsing failed: %s", trace_id, e)
                return self._fallback(source, trace_id)
            if direct.needs_ocr:
                logger.info(
                    "[%s] Text layer unusable (%s, %s page(s)); falling back to OCR",
                    trace_id, direct.reason, direct.page_count,
                )
                return self._fallback(source, trace_id)
            logger.info("[%s] Using native PDF text (%s page(s), len=%s)", trace_id, direct.page_count, len(direct.text))
            return ExtractionResult.ok(
                normalize_text(direct.text),
                source=SOURCE_PDF_TEXT,
                page_count=direct.page_count,
            )

    def call(self, document: Any) -> dict[str, Any]:
        """extract() in its dictionary form: {"success", "raw_text"} or {"success", "message"}."""
        return self.extract(document).to_dict()


def extract(document: Any, *, config: AppConfig | None = None, log: ILogger | None = None) -> ExtractionResult:
    """One-shot extraction with a pipeline built from config (defaults when omitted)."""
    return TextExtractionPipeline.from_config(config, log=log).extract(document)
