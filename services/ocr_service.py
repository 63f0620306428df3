"""
OCR service: implements IOCRService using the rasterizer and extraction.ocr engine API.
Every attempt works in its own random-suffixed scratch directory, removed on every exit path.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from core.exceptions import RasterizationError
from core.interfaces import ILogger, IOCREngine, IOCRService, IRasterizer
from core.models import OCR_FAILURE_MESSAGE, SOURCE_OCR, ExtractionResult
from extraction.document import DocumentSource
from extraction.ocr import run_engine_on_images
from extraction.rasterize import PdfRasterizer
from utils.text_normalize import normalize_text

logger = logging.getLogger(__name__)

SCRATCH_PREFIX = "ocr_pages_"
PAGE_SEPARATOR = " "


@contextmanager
def scratch_workspace(root: str | Path | None = None, log: ILogger | None = None) -> Iterator[Path]:
    """Unique temp directory for one OCR attempt; deleted with everything in it on exit."""
    workdir = Path(tempfile.mkdtemp(prefix=SCRATCH_PREFIX, dir=str(root) if root else None))
    try:
        yield workdir
    finally:
        try:
            shutil.rmtree(workdir)
        except OSError as e:
            (log or logger).warning("Could not remove OCR scratch directory %s: %s", workdir, e)


class OCRService(IOCRService):
    """Production OCR path: document -> page images -> text per page -> joined result."""

    def __init__(
        self,
        engine: IOCREngine,
        rasterizer: IRasterizer | None = None,
        *,
        scratch_dir: str | Path | None = None,
        max_workers: int = 1,
        log: ILogger | None = None,
    ) -> None:
        self._engine = engine
        self._rasterizer = rasterizer or PdfRasterizer()
        self._scratch_dir = scratch_dir or None
        self._max_workers = max(1, int(max_workers))
        self._log = log or logger

    def _rasterize(self, source: DocumentSource, workdir: Path, trace_id: str) -> list[Path]:
        try:
            pdf_path = source.materialize(workdir)
            return self._rasterizer.rasterize(pdf_path, workdir)
        except (RasterizationError, OSError) as e:
            self._log.warning("[%s] Rasterization failed: %s", trace_id, e)
            return []

    def extract(self, source: DocumentSource, *, trace_id: str = "") -> ExtractionResult:
        with scratch_workspace(self._scratch_dir, self._log) as workdir:
            images = self._rasterize(source, workdir, trace_id)
            if not images:
                self._log.warning("[%s] Rasterizer produced no page images", trace_id)
            texts = run_engine_on_images(self._engine, images, self._max_workers, self._log)
        text = normalize_text(PAGE_SEPARATOR.join(texts))
        logger.info(
            "[%s] OCR: %s page(s), engine=%s, combined length %s",
            trace_id, len(images), self._engine.name, len(text),
        )
        if text:
            return ExtractionResult.ok(text, source=SOURCE_OCR, page_count=len(images))
        return ExtractionResult.failure(OCR_FAILURE_MESSAGE, source=SOURCE_OCR, page_count=len(images))
