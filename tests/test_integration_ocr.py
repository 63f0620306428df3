"""
End-to-end tests with real poppler + tesseract. Skipped when the binaries are not installed.
"""
from __future__ import annotations

import io
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from conftest import make_text_pdf, requires_ocr_tools
from extraction.rasterize import PdfRasterizer
from pipeline.text_pipeline import extract
from utils.config import AppConfig


def _image_only_pdf(path: Path, word: str) -> Path:
    """Scanned-style PDF: one page that is a picture of the word, no text layer."""
    page = Image.new("RGB", (1700, 2200), "white")
    draw = ImageDraw.Draw(page)
    draw.text((150, 300), word, fill="black", font=ImageFont.load_default(size=160))
    page.save(path, "PDF", resolution=200.0)
    return path


@requires_ocr_tools
def test_scanned_pdf_is_ocrd(tmp_path: Path) -> None:
    scratch = tmp_path / "scratch"
    scratch.mkdir()
    pdf = _image_only_pdf(tmp_path / "receipt.pdf", "RECEIPT")
    result = extract(pdf, config=AppConfig(scratch_dir=str(scratch)))
    assert result.success is True
    assert result.source == "ocr"
    assert "RECEIPT" in result.raw_text
    assert list(scratch.iterdir()) == []


@requires_ocr_tools
def test_short_text_layer_is_recovered_through_ocr(tmp_path: Path) -> None:
    """20 characters is below the document minimum, so the page is OCR'd; the text survives."""
    scratch = tmp_path / "scratch"
    scratch.mkdir()
    data = make_text_pdf(["Invoice Total: 42.00"], font_size=28)
    result = extract(io.BytesIO(data), config=AppConfig(scratch_dir=str(scratch)))
    assert result.success is True
    assert "Invoice Total: 42.00" in result.raw_text
    assert list(scratch.iterdir()) == []


@requires_ocr_tools
def test_rasterizer_names_sort_in_page_order(tmp_path: Path) -> None:
    pdf = tmp_path / "many.pdf"
    pdf.write_bytes(make_text_pdf([f"Page {i}" for i in range(1, 12)]))
    images = PdfRasterizer(dpi=30).rasterize(pdf, tmp_path)
    assert len(images) == 11
    assert [int(p.stem.rsplit("-", 1)[-1]) for p in images] == list(range(1, 12))
