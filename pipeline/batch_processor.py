"""
Batch processor: list of files -> run pipeline per file, collect metrics.
Does not duplicate pipeline logic; uses TextExtractionPipeline.extract().
Supports parallel execution via max_workers (ThreadPoolExecutor); results keep input order.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from core.models import SOURCE_OCR, SOURCE_PDF_TEXT, BatchMetrics, ExtractionResult
from pipeline.text_pipeline import TextExtractionPipeline

logger = logging.getLogger(__name__)

MISSING_FILE_MESSAGE = "File not found"


def _update_metrics(metrics: BatchMetrics, result: ExtractionResult) -> None:
    """Update counts from a single ExtractionResult."""
    metrics.total_processed += 1
    if not result.success:
        metrics.failed_count += 1
    elif result.source == SOURCE_PDF_TEXT:
        metrics.pdf_text_count += 1
    elif result.source == SOURCE_OCR:
        metrics.ocr_count += 1


class BatchProcessor:
    """
    Extract many files in parallel (or sequentially when max_workers=1). Collects metrics.
    A missing file yields a failure result instead of aborting the batch.
    """

    def __init__(self, pipeline: TextExtractionPipeline, max_workers: int = 1) -> None:
        self._pipeline = pipeline
        self._max_workers = max(1, int(max_workers))

    def _process_one(self, path: Path, stop_on_first_error: bool) -> ExtractionResult:
        if not path.is_file():
            logger.warning("Skip missing file: %s", path)
            return ExtractionResult.failure(f"{MISSING_FILE_MESSAGE}: {path}")
        logger.info("Processing file=%s", path.name)
        try:
            return self._pipeline.extract(path)
        except OSError as e:
            logger.exception("Batch item failed file=%s: %s", path.name, e)
            if stop_on_first_error:
                raise
            return ExtractionResult.failure(f"Could not read {path.name}: {e}")

    def process_batch(
        self,
        file_paths: list[str | Path],
        *,
        stop_on_first_error: bool = False,
    ) -> tuple[list[tuple[Path, ExtractionResult]], BatchMetrics]:
        """
        Run pipeline.extract() for each file. Returns ([(path, result)], metrics) in input order.
        On read errors: if stop_on_first_error, re-raise; else log, continue and count as failed.
        """
        paths = [Path(p) for p in file_paths]
        metrics = BatchMetrics()
        start = time.perf_counter()
        if self._max_workers > 1 and len(paths) > 1:
            with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                results = list(executor.map(lambda p: self._process_one(p, stop_on_first_error), paths))
        else:
            results = [self._process_one(p, stop_on_first_error) for p in paths]
        for result in results:
            _update_metrics(metrics, result)
        metrics.total_time_sec = time.perf_counter() - start
        return list(zip(paths, results)), metrics
