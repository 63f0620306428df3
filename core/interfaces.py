"""
Abstract interfaces for the extraction pipeline.
Every external dependency is behind an interface; the pipeline does not depend on a concrete parser/OCR impl.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any, BinaryIO, Iterator, Protocol

from core.models import ExtractionResult

if TYPE_CHECKING:
    from extraction.document import DocumentSource


class IPage(Protocol):
    """One parsed page. Only text access is required."""

    def extract_text(self) -> Any:
        """Return the page text (str, or bytes for backends that do not decode)."""
        ...


class IPdfParser(ABC):
    """Abstract PDF parser: byte source -> ordered pages."""

    @abstractmethod
    def pages(self, data: str | Path | BinaryIO) -> Iterator[IPage]:
        """
        Yield pages in document order.
        Raises MalformedDocumentError / UnsupportedFeatureError for recoverable structural problems,
        either up front or while iterating.
        """
        ...


class IRasterizer(ABC):
    """Abstract PDF -> images conversion."""

    @abstractmethod
    def rasterize(self, pdf_path: Path, output_dir: Path) -> list[Path]:
        """Write one image per page into output_dir; return paths in page order. [] when nothing was produced."""
        ...


class IOCREngine(ABC):
    """Abstract OCR engine: image path -> text."""

    @property
    def name(self) -> str:
        return "base"

    @abstractmethod
    def recognize(self, image_path: Path) -> str:
        """Recognize text in one page image. May raise; callers treat failures as empty text."""
        ...


class IOCRService(ABC):
    """Abstract OCR path: whole document -> terminal ExtractionResult."""

    @abstractmethod
    def extract(self, source: DocumentSource, *, trace_id: str = "") -> ExtractionResult:
        """Rasterize, OCR and join every page. Never raises for backend failures."""
        ...


class ILogger(Protocol):
    """Minimal logger capability; logging.Logger satisfies it."""

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        ...
