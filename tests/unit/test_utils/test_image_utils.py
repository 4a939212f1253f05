"""
Unit tests for utils.image_utils module.
"""
from io import BytesIO

from PIL import Image
from utils.image_utils import (
    create_sample_image,
    encode_image,
    read_metadata
)


class TestEncodeImage:
    """Tests for encode_image function."""

    def test_jpeg_converts_alpha(self):
        img = Image.new('RGBA', (20, 10))

        data = encode_image(img, format='JPEG', quality=80)

        assert Image.open(BytesIO(data)).format == 'JPEG'

    def test_png(self):
        data = encode_image(Image.new('RGB', (5, 5)), format='PNG')

        assert data.startswith(b'\x89PNG')


class TestReadMetadata:
    """Tests for read_metadata function."""

    def test_metadata(self, sample_image_bytes):
        meta = read_metadata(sample_image_bytes)

        assert (meta.width, meta.height) == (800, 600)
        assert meta.format == 'png'
        assert meta.mode == 'RGB'
        assert meta.size_bytes == len(sample_image_bytes)


class TestSampleImage:
    """Tests for create_sample_image function."""

    def test_sample_image(self):
        img = Image.open(BytesIO(create_sample_image()))

        assert img.format == 'PNG'
        assert img.size == (400, 200)
        # some non-white pixels were drawn
        assert img.convert('L').getextrema()[0] < 255
