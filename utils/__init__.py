"""Shared utilities: config, logger, text normalization."""

from utils.config import AppConfig, OCRConfig, load_config
from utils.logger import get_logger, setup_logging
from utils.text_normalize import normalize_text, repair_encoding

__all__ = [
    "AppConfig",
    "OCRConfig",
    "load_config",
    "get_logger",
    "setup_logging",
    "normalize_text",
    "repair_encoding",
]
