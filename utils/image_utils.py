"""
Image utilities for OCR workflow.

Handles image decoding, encoding and metadata inspection.
"""
from io import BytesIO
from typing import Optional

from PIL import Image, ImageDraw, ImageFont

from core.models import ImageMetadata


def open_image(buffer: bytes) -> Image.Image:
    """
    Decode raw bytes into a fully loaded PIL Image.

    Args:
        buffer: Encoded image bytes

    Returns:
        PIL Image object
    """
    img = Image.open(BytesIO(buffer))
    img.load()
    return img


def read_metadata(buffer: bytes, image: Optional[Image.Image] = None) -> ImageMetadata:
    """
    Read dimensions and format of an encoded image.

    Args:
        buffer: Encoded image bytes
        image: Already decoded image for the same bytes (optional)

    Returns:
        ImageMetadata for the buffer
    """
    if image is None:
        image = open_image(buffer)
    fmt = (image.format or 'unknown').lower()
    return ImageMetadata(
        width=image.width,
        height=image.height,
        format=fmt,
        mode=image.mode,
        size_bytes=len(buffer)
    )


def encode_image(image: Image.Image, format: str = 'JPEG', quality: int = 90) -> bytes:
    """
    Encode a PIL Image to bytes.

    Args:
        image: Image to encode
        format: Pillow format name ('JPEG', 'PNG', ...)
        quality: JPEG quality (1-100), ignored for lossless formats

    Returns:
        Encoded bytes
    """
    buf = BytesIO()
    if format.upper() in ('JPEG', 'JPG'):
        if image.mode not in ('RGB', 'L'):
            image = image.convert('RGB')
        image.save(buf, format='JPEG', quality=quality)
    else:
        image.save(buf, format=format)
    return buf.getvalue()


def create_sample_image(width: int = 400, height: int = 200) -> bytes:
    """
    Render a small PNG with three lines of coloured text.

    Used by the self test to exercise the whole pipeline without any
    input file.
    """
    img = Image.new('RGB', (width, height), color=(255, 255, 255))
    draw = ImageDraw.Draw(img)
    font = ImageFont.load_default()

    lines = [
        ((50, 35), "Test OCR Text", (0, 0, 0)),
        ((50, 85), "Line 2: Blue Text", (0, 0, 255)),
        ((50, 135), "Line 3: Red Text", (255, 0, 0)),
    ]
    for position, text, fill in lines:
        draw.text(position, text, fill=fill, font=font)

    return encode_image(img, format='PNG')
