"""
Image Preparer - Turns a path, URL or raw bytes into a bounded JPEG.

Pipeline: resolve input -> decode -> resize (fit inside, no upscale) ->
normalize -> sharpen -> JPEG encode.
"""
import asyncio
import logging
import math
import os
import re
from pathlib import Path
from typing import Optional, Union

import httpx
from PIL import Image, ImageFilter, ImageOps

from config.ocr_config import ImageOptions
from core.exceptions import ImageProcessingError, InvalidInputError
from core.models import ImageMetadata, PreparedImage, Region
from utils.image_utils import encode_image, open_image, read_metadata

logger = logging.getLogger(__name__)

ImageSource = Union[bytes, bytearray, memoryview, str, os.PathLike]

URL_PATTERN = re.compile(r'^https?://', re.IGNORECASE)


def clamp_region(region: Region) -> tuple:
    """
    Clamp a region to a valid crop box.

    Left/top are floored and never negative; width/height are floored and
    at least 1.

    Returns:
        Tuple of (left, top, width, height)
    """
    left = max(0, math.floor(region.x))
    top = max(0, math.floor(region.y))
    width = max(1, math.floor(region.width))
    height = max(1, math.floor(region.height))
    return left, top, width, height


class ImageProcessor:
    """Prepares images for a vision model."""

    def __init__(
        self,
        options: Optional[ImageOptions] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        fetch_timeout: float = 30.0
    ):
        """
        Initialize image processor.

        Args:
            options: Resize/enhancement/encoding options
            http_client: Client used for URL sources (a fresh one per fetch if omitted)
            fetch_timeout: Timeout for URL downloads in seconds
        """
        self.options = options or ImageOptions()
        self.http_client = http_client
        self.fetch_timeout = fetch_timeout

    async def load_source(self, source: ImageSource) -> bytes:
        """
        Resolve an input into raw encoded bytes.

        Raises:
            InvalidInputError: If the source type is not supported
            ImageProcessingError: If the URL or file cannot be read
        """
        if isinstance(source, (bytes, bytearray, memoryview)):
            return bytes(source)

        if isinstance(source, os.PathLike):
            source = os.fspath(source)
        if not isinstance(source, str):
            raise InvalidInputError(
                f"Invalid image source type {type(source).__name__}. "
                "Must be a path, URL or bytes."
            )

        try:
            if URL_PATTERN.match(source):
                return await self._fetch(source)
            return await asyncio.to_thread(Path(source).read_bytes)
        except (httpx.HTTPError, httpx.InvalidURL, OSError, ValueError) as e:
            raise ImageProcessingError(f"Image processing failed: {e}") from e

    async def _fetch(self, url: str) -> bytes:
        logger.debug(f"Downloading image: {url}")
        if self.http_client is not None:
            response = await self.http_client.get(url)
        else:
            async with httpx.AsyncClient(
                timeout=self.fetch_timeout,
                follow_redirects=True
            ) as client:
                response = await client.get(url)
        response.raise_for_status()
        return response.content

    async def prepare(self, source: ImageSource) -> PreparedImage:
        """
        Load and prepare an image.

        Args:
            source: File path, http(s) URL or raw bytes

        Returns:
            PreparedImage with the JPEG buffer and both metadata sets

        Raises:
            InvalidInputError: If the source type is not supported
            ImageProcessingError: If anything fails while reading or encoding
        """
        raw = await self.load_source(source)
        try:
            return await asyncio.to_thread(self._process, raw)
        except Exception as e:
            raise ImageProcessingError(f"Image processing failed: {e}") from e

    def _process(self, raw: bytes) -> PreparedImage:
        image = open_image(raw)
        source_format = (image.format or 'unknown').lower()

        # Fix EXIF orientation
        image = ImageOps.exif_transpose(image)
        original = ImageMetadata(
            width=image.width,
            height=image.height,
            format=source_format,
            mode=image.mode,
            size_bytes=len(raw)
        )
        logger.debug(f"Original image: {original}")

        if image.mode != 'RGB':
            image = image.convert('RGB')

        opts = self.options
        if image.width > opts.max_width or image.height > opts.max_height:
            image.thumbnail((opts.max_width, opts.max_height), Image.Resampling.LANCZOS)

        if opts.normalize:
            image = ImageOps.autocontrast(image)
        if opts.sharpen:
            image = image.filter(ImageFilter.SHARPEN)

        buffer = encode_image(image, format='JPEG', quality=opts.quality)
        metadata = read_metadata(buffer)
        logger.debug(f"Processed image: {metadata}")

        return PreparedImage(buffer=buffer, metadata=metadata, original_metadata=original)

    def crop(self, buffer: bytes, region: Region) -> bytes:
        """
        Crop an encoded image to a region and return PNG bytes.

        Raises:
            ImageProcessingError: If the buffer cannot be decoded or encoded
        """
        left, top, width, height = clamp_region(region)
        try:
            image = open_image(buffer)
            cropped = image.crop((left, top, left + width, top + height))
            return encode_image(cropped, format='PNG')
        except Exception as e:
            raise ImageProcessingError(f"Region crop failed: {e}") from e
