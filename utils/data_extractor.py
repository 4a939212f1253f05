"""
Post-processing helpers that pick typed data out of an OCR result.
"""
import re
from collections import defaultdict
from typing import Dict, List

from core.models import OCRResult, OCRTextElement

EMAIL_PATTERN = re.compile(r'[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}')
PHONE_PATTERN = re.compile(r'\+?[\d\s\-()]{10,}')
DATE_PATTERN = re.compile(r'\d{1,2}/\d{1,2}/\d{4}|\d{4}-\d{2}-\d{2}|\d{1,2}-\d{1,2}-\d{4}')
NUMBER_PATTERN = re.compile(r'\d+\.?\d*')
URL_PATTERN = re.compile(r'https?://\S+')


class OCRDataExtractor:
    """Filter and group the elements of an OCRResult."""

    @staticmethod
    def _matching(result: OCRResult, pattern: re.Pattern) -> List[OCRTextElement]:
        return [el for el in result.elements if pattern.search(el.text)]

    @staticmethod
    def extract_emails(result: OCRResult) -> List[OCRTextElement]:
        return OCRDataExtractor._matching(result, EMAIL_PATTERN)

    @staticmethod
    def extract_phone_numbers(result: OCRResult) -> List[OCRTextElement]:
        return OCRDataExtractor._matching(result, PHONE_PATTERN)

    @staticmethod
    def extract_dates(result: OCRResult) -> List[OCRTextElement]:
        return OCRDataExtractor._matching(result, DATE_PATTERN)

    @staticmethod
    def extract_numbers(result: OCRResult) -> List[OCRTextElement]:
        return OCRDataExtractor._matching(result, NUMBER_PATTERN)

    @staticmethod
    def extract_urls(result: OCRResult) -> List[OCRTextElement]:
        return OCRDataExtractor._matching(result, URL_PATTERN)

    @staticmethod
    def group_by_color(result: OCRResult) -> Dict[str, List[OCRTextElement]]:
        """Group elements by their text color ('unknown' when not detected)."""
        groups = defaultdict(list)
        for el in result.elements:
            groups[el.color or 'unknown'].append(el)
        return dict(groups)

    @staticmethod
    def group_by_region(result: OCRResult, region_height: float = 50) -> Dict[int, List[OCRTextElement]]:
        """
        Group elements into horizontal bands.

        Args:
            result: OCR result
            region_height: Band height in pixels

        Returns:
            Dict mapping band index (y // region_height) to elements
        """
        if region_height <= 0:
            raise ValueError("region_height must be positive")
        groups = defaultdict(list)
        for el in result.elements:
            groups[int(el.coordinates.y // region_height)].append(el)
        return dict(groups)

    @staticmethod
    def find_by_coordinates(
        result: OCRResult,
        x: float,
        y: float,
        tolerance: float = 10
    ) -> List[OCRTextElement]:
        """Elements whose top-left corner lies within tolerance of (x, y)."""
        return [
            el for el in result.elements
            if abs(el.coordinates.x - x) <= tolerance
            and abs(el.coordinates.y - y) <= tolerance
        ]
