"""Config package - Environment settings and validated OCR configuration."""

from .settings import Settings, settings
from .ocr_config import ImageOptions, OCRConfig
from .logging_config import setup_logging

__all__ = [
    'Settings',
    'settings',
    'ImageOptions',
    'OCRConfig',
    'setup_logging'
]
