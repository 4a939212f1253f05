"""
API Dependencies - Dependency injection for FastAPI.

Provides reusable dependencies for the OCR service.
"""
from typing import Callable, Optional

from config.ocr_config import OCRConfig
from config.settings import settings
from services.ocr_service import OCRService


# Global OCR service instance
_ocr_service = None


def get_ocr_service() -> OCRService:
    """
    Get or create the default OCR service.

    Returns:
        OCRService configured from environment settings

    Raises:
        ConfigurationError: If the configured provider is not usable
    """
    global _ocr_service
    if _ocr_service is None:
        _ocr_service = OCRService(OCRConfig.from_settings(settings))
    return _ocr_service


def reset_ocr_service():
    """Forget the default OCR service so the next request rebuilds it."""
    global _ocr_service
    _ocr_service = None


def get_ocr_service_factory() -> Callable[[], OCRService]:
    """
    Dependency returning the default service getter without calling it.

    Routes that may not need the default service (a provider override is
    given) resolve it only when they do.
    """
    return get_ocr_service


def create_ocr_service(provider: Optional[str] = None) -> OCRService:
    """
    Build a one-off OCR service for a specific provider.

    Args:
        provider: Provider name; API key is taken from settings

    Returns:
        OCRService instance (caller closes it)
    """
    return OCRService(OCRConfig.from_settings(settings, provider=provider))
