"""
PDF text extraction with OCR fallback: entry point.

Usage:
  python main.py FILE [FILE ...] [--config PATH] [--engine NAME] [--lang LANG] [--dpi N]
                 [--workers N] [--log-level LEVEL] [--output PATH]

- Each PDF is read through its text layer; scanned or unreadable PDFs are rasterized and OCR'd.
- Output: one JSON object per line on stdout ({"file", "success", "raw_text" | "message"}),
  or a JSON array written to --output.
- Exit status: 0 when every file yielded text, 1 otherwise, 2 on configuration errors.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from core.exceptions import ConfigError
from core.models import ExtractionResult
from pipeline.batch_processor import BatchProcessor
from pipeline.text_pipeline import TextExtractionPipeline
from utils.config import load_config
from utils.logger import setup_logging


def _result_record(path: Path, result: ExtractionResult) -> dict[str, Any]:
    return {"file": str(path), **result.to_dict()}


def save_results(records: list[dict[str, Any]], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(records, f, indent=2, ensure_ascii=False)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Extract plain text from PDFs, falling back to OCR for scanned documents",
    )
    parser.add_argument("files", nargs="+", help="PDF files to extract")
    parser.add_argument("--config", "-c", default=None, help="YAML config file (default: config.yaml if present)")
    parser.add_argument("--engine", default=None, help="OCR engine (default: tesseract)")
    parser.add_argument("--lang", default=None, help="OCR recognition language (default: eng)")
    parser.add_argument("--dpi", type=int, default=None, help="Rasterization DPI (default: 300)")
    parser.add_argument(
        "--workers",
        "-w",
        type=int,
        default=None,
        help="Parallel OCR workers per document (default: 1)",
    )
    parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Write results as a JSON array to this file instead of stdout",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config).with_overrides(
            log_level=args.log_level,
            ocr_engine=args.engine,
            ocr_language=args.lang,
            ocr_dpi=args.dpi,
            ocr_max_workers=args.workers,
        )
        setup_logging(config.log_level)
        pipeline = TextExtractionPipeline.from_config(config)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    log = logging.getLogger(__name__)

    results, metrics = BatchProcessor(pipeline).process_batch(args.files)
    records = [_result_record(path, result) for path, result in results]

    if args.output:
        out_path = Path(args.output)
        save_results(records, out_path)
        log.info("Wrote %s result(s) to %s", len(records), out_path)
    else:
        for record in records:
            print(json.dumps(record, ensure_ascii=False))

    log.info("Batch complete: %s", metrics.to_dict())
    return 0 if metrics.failed_count == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
