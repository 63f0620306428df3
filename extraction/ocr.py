"""
OCR over rasterized page images with pluggable engines and preprocessing providers.
BaseOCREngine -> TesseractEngine; BasePreprocessor -> NoOp / PIL.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Sequence

import pytesseract
from PIL import Image, ImageEnhance, ImageFilter

from core.interfaces import ILogger, IOCREngine

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "eng"
TESSERACT_CONFIG = "--oem 3"
MIN_SIDE_PX = 300

ENGINES = ("tesseract",)
PREPROCESSORS = ("none", "pil")


# ---------------------------------------------------------------------------
# Preprocessors
# ---------------------------------------------------------------------------


class BasePreprocessor(ABC):
    """Abstract image preprocessor for OCR. Returns PIL Image (e.g. grayscale for Tesseract)."""

    @property
    def name(self) -> str:
        return "base"

    @abstractmethod
    def preprocess(self, image: Image.Image) -> Image.Image:
        """Return preprocessed image (same or new)."""
        ...


class NoOpPreprocessor(BasePreprocessor):
    """No preprocessing; return image as-is."""

    @property
    def name(self) -> str:
        return "none"

    def preprocess(self, image: Image.Image) -> Image.Image:
        return image


class PILPreprocessor(BasePreprocessor):
    """Grayscale, resize up if small, sharpen, contrast."""

    @property
    def name(self) -> str:
        return "pil"

    def preprocess(self, image: Image.Image) -> Image.Image:
        if image.mode != "L":
            image = image.convert("L")
        min_side = min(image.size)
        if 0 < min_side < MIN_SIDE_PX:
            scale = MIN_SIDE_PX / min_side
            new_w = max(MIN_SIDE_PX, int(image.width * scale))
            new_h = max(MIN_SIDE_PX, int(image.height * scale))
            image = image.resize((new_w, new_h), Image.Resampling.LANCZOS)
        image = image.filter(ImageFilter.SHARPEN)
        return ImageEnhance.Contrast(image).enhance(1.3)


# ---------------------------------------------------------------------------
# Engines
# ---------------------------------------------------------------------------


class TesseractEngine(IOCREngine):
    """Tesseract OCR with one fixed recognition language."""

    def __init__(
        self,
        language: str = DEFAULT_LANGUAGE,
        config: str = TESSERACT_CONFIG,
        preprocessor: BasePreprocessor | None = None,
    ) -> None:
        self._language = language
        self._config = config
        self._preprocessor = preprocessor or NoOpPreprocessor()

    @property
    def name(self) -> str:
        return "tesseract"

    @property
    def language(self) -> str:
        return self._language

    def recognize(self, image_path: Path) -> str:
        with Image.open(image_path) as image:
            prepared = self._preprocessor.preprocess(image)
            text = pytesseract.image_to_string(prepared, lang=self._language, config=self._config)
        return text or ""


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


def create_preprocessor(kind: str = "none") -> BasePreprocessor:
    """kind: 'none' | 'pil'."""
    k = (kind or "none").strip().lower()
    if k == "pil":
        return PILPreprocessor()
    if k == "none":
        return NoOpPreprocessor()
    raise ValueError(f"Unknown preprocessor: {kind!r}")


def create_ocr_engine(
    engine: str = "tesseract",
    *,
    language: str = DEFAULT_LANGUAGE,
    config: str = TESSERACT_CONFIG,
    preprocessor_kind: str = "none",
) -> IOCREngine:
    """Create OCR engine by name."""
    e = (engine or "tesseract").strip().lower()
    if e != "tesseract":
        raise ValueError(f"Unknown OCR engine: {engine!r}")
    eng = TesseractEngine(language=language, config=config, preprocessor=create_preprocessor(preprocessor_kind))
    logger.debug("OCR: engine=%s, lang=%s, preprocessor=%s", eng.name, language, preprocessor_kind)
    return eng


# ---------------------------------------------------------------------------
# Running an engine over page images
# ---------------------------------------------------------------------------


def recognize_or_empty(engine: IOCREngine, image_path: Path, log: ILogger | None = None) -> str:
    """OCR one image; any failure is logged and yields ""."""
    try:
        return engine.recognize(image_path) or ""
    except Exception as e:
        (log or logger).warning("OCR failed on %s: %s", Path(image_path).name, e)
        return ""


def run_engine_on_images(
    engine: IOCREngine,
    images: Sequence[Path],
    max_workers: int = 1,
    log: ILogger | None = None,
) -> list[str]:
    """Run OCR engine on each image; returns texts in the same order as images."""
    if not images:
        return []
    if max_workers <= 1 or len(images) == 1:
        return [recognize_or_empty(engine, img, log) for img in images]
    # executor.map yields in submission order regardless of completion order
    with ThreadPoolExecutor(max_workers=min(max_workers, len(images))) as executor:
        return list(executor.map(lambda img: recognize_or_empty(engine, img, log), images))
