"""
Shared test doubles and PDF builders.
Fakes implement the collaborator interfaces so routing and cleanup are tested without poppler/tesseract.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any, BinaryIO, Iterator

import pytest

from core.exceptions import MalformedDocumentError
from core.interfaces import IOCREngine, IPdfParser, IRasterizer


# ---------------------------------------------------------------------------
# PDF builders
# ---------------------------------------------------------------------------


def _escape(line: str) -> str:
    return line.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def make_text_pdf(pages: list[str], font_size: int = 12) -> bytes:
    """Minimal valid PDF (Helvetica text layer, correct xref) with one page per entry."""
    n = len(pages)
    page_ids = [4 + 2 * i for i in range(n)]
    kids = " ".join(f"{pid} 0 R" for pid in page_ids)
    objects: list[bytes] = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {n} >>".encode(),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for pid, text in zip(page_ids, pages):
        ops: list[str] = []
        if text:
            ops = ["BT", f"/F1 {font_size} Tf", f"{font_size + 4} TL", "72 720 Td"]
            ops += [f"({_escape(line)}) Tj T*" for line in text.split("\n")]
            ops.append("ET")
        stream = "\n".join(ops).encode("latin-1")
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Resources << /Font << /F1 3 0 R >> >> /Contents {pid + 1} 0 R >>"
            ).encode()
        )
        objects.append(b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream")

    out = bytearray(b"%PDF-1.4\n")
    offsets: list[int] = []
    for num, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{num} 0 obj\n".encode() + body + b"\nendobj\n"
    xref_at = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for off in offsets:
        out += f"{off:010d} 00000 n \n".encode()
    out += f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\nstartxref\n{xref_at}\n%%EOF\n".encode()
    return bytes(out)


LONG_INVOICE = (
    "ACME Corporation\n"
    "Invoice number 2024-0117 issued to Globex Industries\n"
    "Consulting services for the month of January\n"
    "Invoice Total: 42.00\n"
    "Payment due within thirty days of receipt"
)


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakePage:
    def __init__(self, text: Any = "", error: Exception | None = None) -> None:
        self._text = text
        self._error = error

    def extract_text(self) -> Any:
        if self._error is not None:
            raise self._error
        return self._text


class FakeParser(IPdfParser):
    """Yields the given pages; optionally raises a parser error up front or after N pages."""

    def __init__(
        self,
        pages: list[Any] | None = None,
        *,
        error: Exception | None = None,
        error_after: int | None = None,
    ) -> None:
        self._pages = [p if isinstance(p, FakePage) else FakePage(p) for p in (pages or [])]
        self._error = error
        self._error_after = error_after
        self.calls = 0
        self.yielded = 0

    def pages(self, data: str | Path | BinaryIO) -> Iterator[FakePage]:
        self.calls += 1
        if self._error is not None and self._error_after is None:
            raise self._error
        for index, page in enumerate(self._pages):
            if self._error is not None and index == self._error_after:
                raise self._error
            self.yielded += 1
            yield page


class FakeRasterizer(IRasterizer):
    """Writes one small file per page so cleanup can be observed; records the input path."""

    def __init__(self, page_count: int = 1, *, error: Exception | None = None) -> None:
        self.page_count = page_count
        self.error = error
        self.calls: list[Path] = []
        self.seen_input: bytes = b""

    def rasterize(self, pdf_path: Path, output_dir: Path) -> list[Path]:
        self.calls.append(Path(pdf_path))
        self.seen_input = Path(pdf_path).read_bytes()
        images = []
        for i in range(1, self.page_count + 1):
            p = Path(output_dir) / f"page-{i:02d}.png"
            p.write_bytes(b"\x89PNG fake")
            images.append(p)
        if self.error is not None:
            raise self.error
        return images


class FakeOCREngine(IOCREngine):
    """Returns texts[i] for page i (1-indexed from the file name); pages in fail_on raise."""

    def __init__(self, texts: list[str] | None = None, fail_on: set[int] | None = None) -> None:
        self.texts = texts or []
        self.fail_on = fail_on or set()
        self.seen: list[str] = []

    @property
    def name(self) -> str:
        return "fake"

    def recognize(self, image_path: Path) -> str:
        self.seen.append(Path(image_path).name)
        page = int(Path(image_path).stem.rsplit("-", 1)[-1])
        if page in self.fail_on:
            raise RuntimeError(f"engine crashed on page {page}")
        return self.texts[page - 1] if page - 1 < len(self.texts) else ""


class ListLogger:
    """Injected logger capturing warnings."""

    def __init__(self) -> None:
        self.warnings: list[str] = []

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.warnings.append(msg % args if args else msg)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        pass


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def scratch(tmp_path: Path) -> Path:
    d = tmp_path / "scratch"
    d.mkdir()
    return d


@pytest.fixture
def text_pdf(tmp_path: Path) -> Path:
    p = tmp_path / "invoice.pdf"
    p.write_bytes(make_text_pdf([LONG_INVOICE]))
    return p


@pytest.fixture
def malformed_error() -> MalformedDocumentError:
    return MalformedDocumentError("Malformed PDF: EOF marker not found")


requires_ocr_tools = pytest.mark.skipif(
    shutil.which("pdftoppm") is None or shutil.which("tesseract") is None,
    reason="poppler (pdftoppm) and tesseract are required",
)
