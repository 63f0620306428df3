"""
PDF -> PNG page images via pdf2image (poppler pdftoppm).
Images are written into a caller-owned scratch directory; the caller removes it.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path

from pdf2image import convert_from_path
from pdf2image.exceptions import (
    PDFInfoNotInstalledError,
    PDFPageCountError,
    PDFPopplerTimeoutError,
    PDFSyntaxError,
)

from core.exceptions import RasterizationError
from core.interfaces import IRasterizer

logger = logging.getLogger(__name__)

DEFAULT_DPI = 300
PAGE_PREFIX = "page"

# pdftoppm names pages "<prefix>-<page>.png" with the page number zero-padded.
_PAGE_NUMBER = re.compile(r"-(\d+)\.png$", re.IGNORECASE)


def page_sort_key(path: Path) -> tuple[int, str]:
    """Numeric page index from the file name; unnumbered names sort last."""
    m = _PAGE_NUMBER.search(path.name)
    return (int(m.group(1)) if m else 1 << 30, path.name)


class PdfRasterizer(IRasterizer):
    """One PNG per page at a fixed DPI."""

    def __init__(self, dpi: int = DEFAULT_DPI, *, timeout_sec: int | None = None) -> None:
        self.dpi = dpi
        self.timeout_sec = timeout_sec

    def rasterize(self, pdf_path: Path, output_dir: Path) -> list[Path]:
        """Raises RasterizationError when poppler is unavailable or cannot read the PDF."""
        pdf_path = Path(pdf_path)
        output_dir = Path(output_dir)
        try:
            paths = convert_from_path(
                str(pdf_path),
                dpi=self.dpi,
                output_folder=str(output_dir),
                output_file=PAGE_PREFIX,
                fmt="png",
                paths_only=True,
                timeout=self.timeout_sec,
            )
        except PDFInfoNotInstalledError as e:
            raise RasterizationError(f"poppler is not installed: {e}") from e
        except (PDFPageCountError, PDFSyntaxError, PDFPopplerTimeoutError) as e:
            raise RasterizationError(f"Could not rasterize {pdf_path.name}: {e}") from e
        except OSError as e:
            raise RasterizationError(f"Rasterizer failed on {pdf_path.name}: {e}") from e
        images = sorted((Path(p) for p in paths), key=page_sort_key)
        logger.debug("Rasterized %s page(s) of %s at %s dpi", len(images), pdf_path.name, self.dpi)
        return images
