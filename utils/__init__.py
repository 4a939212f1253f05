"""Utilities package - Helper functions for images and OCR result post-processing."""

from .image_utils import (
    open_image,
    read_metadata,
    encode_image,
    create_sample_image
)

from .data_extractor import OCRDataExtractor

__all__ = [
    # Image utils
    'open_image',
    'read_metadata',
    'encode_image',
    'create_sample_image',

    # Result helpers
    'OCRDataExtractor'
]
