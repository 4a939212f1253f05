"""
Exception taxonomy for the OCR workflow.

Only OCRExtractionError escapes a single-image extraction; the other errors
are raised by the individual stages and wrapped at that boundary.
"""
from typing import Optional


class VisionOCRError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(VisionOCRError):
    """Invalid or missing provider / API key / image options."""


class InvalidInputError(VisionOCRError):
    """Unsupported input type or malformed argument."""


class ImageProcessingError(VisionOCRError):
    """Image could not be fetched, read, decoded or encoded."""


class ModelInvocationError(VisionOCRError):
    """Every model invocation strategy failed (including timeouts)."""


class OCRExtractionError(VisionOCRError):
    """Externally visible wrapper around any failure of an extraction."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
