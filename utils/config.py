"""
Configuration loader: YAML + env overrides.
Classifier thresholds are not configurable; only backends, OCR settings and scratch location are.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from core.exceptions import ConfigError
from extraction.ocr import DEFAULT_LANGUAGE, ENGINES, PREPROCESSORS, TESSERACT_CONFIG
from extraction.rasterize import DEFAULT_DPI

DEFAULT_CONFIG_PATH = "config.yaml"


def _coerce_int(s: Any, key: str) -> int:
    try:
        return int(s)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{key} must be an integer, got {s!r}") from e


@dataclass(frozen=True)
class OCRConfig:
    """OCR fallback settings."""

    engine: str = "tesseract"
    language: str = DEFAULT_LANGUAGE
    dpi: int = DEFAULT_DPI
    preprocessor: str = "none"  # none | pil
    tesseract_config: str = TESSERACT_CONFIG
    max_workers: int = 1

    def __post_init__(self) -> None:
        if self.engine not in ENGINES:
            raise ConfigError(f"Unknown OCR engine {self.engine!r}; expected one of {ENGINES}")
        if self.preprocessor not in PREPROCESSORS:
            raise ConfigError(f"Unknown preprocessor {self.preprocessor!r}; expected one of {PREPROCESSORS}")
        if self.dpi <= 0:
            raise ConfigError(f"dpi must be positive, got {self.dpi}")
        if self.max_workers < 1:
            raise ConfigError(f"max_workers must be >= 1, got {self.max_workers}")
        if not self.language:
            raise ConfigError("OCR language must not be empty")


@dataclass(frozen=True)
class AppConfig:
    """Immutable application configuration. Built from YAML + env."""

    log_level: str = "INFO"
    scratch_dir: str = ""  # "" -> system temp dir
    ocr: OCRConfig = field(default_factory=OCRConfig)

    def with_overrides(self, **overrides: Any) -> AppConfig:
        """Return new config; keys ocr_* go to the nested OCRConfig. None values are ignored."""
        top = {k: v for k, v in overrides.items() if v is not None and not k.startswith("ocr_")}
        nested = {k[4:]: v for k, v in overrides.items() if v is not None and k.startswith("ocr_")}
        unknown = set(top) - {"log_level", "scratch_dir"}
        if unknown:
            raise ConfigError(f"Unknown config keys: {sorted(unknown)}")
        ocr = replace(self.ocr, **nested) if nested else self.ocr
        return replace(self, ocr=ocr, **top)


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def _config_from_dict(data: dict[str, Any]) -> AppConfig:
    ocr_data = data.get("ocr") or {}
    if not isinstance(ocr_data, dict):
        raise ConfigError("'ocr' section must be a mapping")
    defaults = OCRConfig()
    return AppConfig(
        log_level=str(data.get("log_level", "INFO")),
        scratch_dir=str(data.get("scratch_dir") or ""),
        ocr=OCRConfig(
            engine=str(ocr_data.get("engine", defaults.engine)).strip().lower(),
            language=str(ocr_data.get("language", defaults.language)),
            dpi=_coerce_int(ocr_data.get("dpi", defaults.dpi), "ocr.dpi"),
            preprocessor=str(ocr_data.get("preprocessor", defaults.preprocessor)).strip().lower(),
            tesseract_config=str(ocr_data.get("tesseract_config", defaults.tesseract_config)),
            max_workers=_coerce_int(ocr_data.get("max_workers", defaults.max_workers), "ocr.max_workers"),
        ),
    )


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """
    Load config from YAML file (missing file -> defaults), then apply env overrides.
    Env vars: LOG_LEVEL, SCRATCH_DIR, OCR_ENGINE, OCR_LANG, OCR_DPI, OCR_PREPROCESSOR, OCR_MAX_WORKERS.
    """
    path = Path(config_path) if config_path else Path(DEFAULT_CONFIG_PATH)
    if config_path and not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    cfg = _config_from_dict(_load_yaml(path))
    overrides: dict[str, Any] = {
        "log_level": os.getenv("LOG_LEVEL") or None,
        "scratch_dir": os.getenv("SCRATCH_DIR") or None,
        "ocr_engine": (os.getenv("OCR_ENGINE") or "").strip().lower() or None,
        "ocr_language": os.getenv("OCR_LANG") or None,
        "ocr_preprocessor": (os.getenv("OCR_PREPROCESSOR") or "").strip().lower() or None,
    }
    if os.getenv("OCR_DPI"):
        overrides["ocr_dpi"] = _coerce_int(os.getenv("OCR_DPI"), "OCR_DPI")
    if os.getenv("OCR_MAX_WORKERS"):
        overrides["ocr_max_workers"] = _coerce_int(os.getenv("OCR_MAX_WORKERS"), "OCR_MAX_WORKERS")
    return cfg.with_overrides(**overrides)
