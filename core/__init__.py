"""Core package - Domain models, constants and errors."""

from .models import (
    ImageMetadata,
    PreparedImage,
    TextCoordinates,
    OCRTextElement,
    ImageInfo,
    OCRMetadata,
    OCRResult,
    Region
)
from .constants import (
    SUPPORTED_PROVIDERS,
    DEFAULT_MODELS,
    AVAILABLE_MODELS,
    DEFAULT_IMAGE_OPTIONS,
    DEFAULT_OCR_PARAMS
)
from .exceptions import (
    VisionOCRError,
    ConfigurationError,
    InvalidInputError,
    ImageProcessingError,
    ModelInvocationError,
    OCRExtractionError
)

__all__ = [
    'ImageMetadata',
    'PreparedImage',
    'TextCoordinates',
    'OCRTextElement',
    'ImageInfo',
    'OCRMetadata',
    'OCRResult',
    'Region',
    'SUPPORTED_PROVIDERS',
    'DEFAULT_MODELS',
    'AVAILABLE_MODELS',
    'DEFAULT_IMAGE_OPTIONS',
    'DEFAULT_OCR_PARAMS',
    'VisionOCRError',
    'ConfigurationError',
    'InvalidInputError',
    'ImageProcessingError',
    'ModelInvocationError',
    'OCRExtractionError'
]
