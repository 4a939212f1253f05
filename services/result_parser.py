"""
Response Normalizer - Converts free-form model text into an OCRResult.

The model is not a trusted structured-output source: every field is
validated and defaulted independently, and a reply that cannot be parsed at
all becomes a single-element fallback result instead of an error.
"""
import json
import logging
import math
import re
import time
from typing import Any, Optional

from core.constants import DEFAULT_CONFIDENCE, UNKNOWN_COLOR, WORDS_PER_LINE_GUESS
from core.models import (
    ImageInfo,
    ImageMetadata,
    OCRMetadata,
    OCRResult,
    OCRTextElement,
    TextCoordinates,
)

logger = logging.getLogger(__name__)

CODE_FENCE_PATTERN = re.compile(r'```(?:json)?[ \t]*\n?', re.IGNORECASE)
JSON_OBJECT_PATTERN = re.compile(r'\{[\s\S]*\}')


def extract_json_candidate(text: str) -> str:
    """
    Strip code fences and return the greedy ``{...}`` span of a reply.

    Falls back to the whole trimmed string when no braces are found.
    """
    candidate = CODE_FENCE_PATTERN.sub('', text.strip())
    match = JSON_OBJECT_PATTERN.search(candidate)
    if match:
        return match.group(0)
    return candidate.strip()


def to_number(value: Any) -> Optional[float]:
    """
    Coerce a JSON value to a finite number.

    Returns None for absent, boolean, non-numeric, NaN or infinite values.
    """
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _compact(number: float):
    return int(number) if float(number).is_integer() else number


def _number_or(value: Any, default):
    number = to_number(value)
    return default if number is None else _compact(number)


def _index_or(value: Any, default: int) -> int:
    number = to_number(value)
    if number is None or number < 1:
        return default
    return int(number)


def _label_or_unknown(value: Any) -> str:
    if value is None:
        return UNKNOWN_COLOR
    label = str(value).strip()
    return label or UNKNOWN_COLOR


def _coerce_element(element: Any, index: int) -> OCRTextElement:
    if not isinstance(element, dict):
        raise ValueError(f"Element {index} is not an object")

    coords = element.get('coordinates')
    if coords is None:
        coords = {}
    elif not isinstance(coords, dict):
        raise ValueError(f"Element {index} coordinates are not an object")

    x = _number_or(coords.get('x'), 0)
    y = _number_or(coords.get('y'), 0)
    confidence = _number_or(element.get('confidence'), DEFAULT_CONFIDENCE)
    text = element.get('text')

    return OCRTextElement(
        text='' if text is None else str(text),
        coordinates=TextCoordinates(
            x=x,
            y=y,
            width=_number_or(coords.get('width'), 0),
            height=_number_or(coords.get('height'), 0),
            center_x=_number_or(coords.get('centerX'), x),
            center_y=_number_or(coords.get('centerY'), y)
        ),
        confidence=min(max(confidence, 0), 100),
        color=_label_or_unknown(element.get('color')),
        background_color=_label_or_unknown(element.get('backgroundColor')),
        line_number=_index_or(element.get('lineNumber'), index // WORDS_PER_LINE_GUESS + 1),
        word_index=_index_or(element.get('wordIndex'), index % WORDS_PER_LINE_GUESS + 1)
    )


def _elapsed_ms(start_time: float) -> int:
    return int(round((time.perf_counter() - start_time) * 1000))


def _image_info(metadata: ImageMetadata, original_metadata: ImageMetadata) -> ImageInfo:
    return ImageInfo(
        width=original_metadata.width,
        height=original_metadata.height,
        format=original_metadata.format,
        processed_width=metadata.width,
        processed_height=metadata.height
    )


def build_fallback_result(
    raw_text: str,
    metadata: ImageMetadata,
    original_metadata: ImageMetadata,
    start_time: float
) -> OCRResult:
    """Single element covering the whole processed image, holding the raw reply."""
    width, height = metadata.width, metadata.height
    element = OCRTextElement(
        text=raw_text,
        coordinates=TextCoordinates(
            x=0,
            y=0,
            width=width,
            height=height,
            center_x=_compact(width / 2),
            center_y=_compact(height / 2)
        ),
        confidence=DEFAULT_CONFIDENCE,
        color=UNKNOWN_COLOR,
        background_color=UNKNOWN_COLOR,
        line_number=1,
        word_index=1
    )
    return OCRResult(
        raw_text=raw_text,
        elements=[element],
        metadata=OCRMetadata(
            total_elements=1,
            average_confidence=DEFAULT_CONFIDENCE,
            processing_time_ms=_elapsed_ms(start_time),
            image_info=_image_info(metadata, original_metadata)
        ),
        is_fallback=True
    )


def parse_json_result(
    raw_text: str,
    metadata: ImageMetadata,
    original_metadata: ImageMetadata,
    start_time: float
) -> OCRResult:
    """
    Parse a model reply into an OCRResult.

    Never raises for parse reasons; unparseable replies produce the fallback
    result from build_fallback_result.

    Args:
        raw_text: Model reply, verbatim
        metadata: Metadata of the prepared (processed) image
        original_metadata: Metadata of the image before resizing
        start_time: time.perf_counter() value taken when the extraction began

    Returns:
        OCRResult
    """
    try:
        parsed = json.loads(extract_json_candidate(raw_text))
        if not isinstance(parsed, dict):
            raise ValueError("Reply is not a JSON object")

        raw_elements = parsed.get('elements')
        if raw_elements is None:
            raw_elements = []
        elif not isinstance(raw_elements, list):
            raise ValueError("'elements' is not a list")

        elements = [_coerce_element(el, i) for i, el in enumerate(raw_elements)]
        average = (
            sum(el.confidence for el in elements) / len(elements)
            if elements else 0
        )
        result_text = parsed.get('rawText')

        return OCRResult(
            raw_text='' if result_text is None else str(result_text),
            elements=elements,
            metadata=OCRMetadata(
                total_elements=len(elements),
                average_confidence=average,
                processing_time_ms=_elapsed_ms(start_time),
                image_info=_image_info(metadata, original_metadata)
            )
        )
    except (ValueError, TypeError, AttributeError, RecursionError) as e:
        # json.JSONDecodeError is a ValueError
        logger.debug(f"JSON parsing failed, creating fallback result: {e}")
        return build_fallback_result(raw_text, metadata, original_metadata, start_time)


class ResultParser:
    """Injectable wrapper around parse_json_result."""

    def parse(
        self,
        raw_text: str,
        metadata: ImageMetadata,
        original_metadata: ImageMetadata,
        start_time: float
    ) -> OCRResult:
        return parse_json_result(raw_text, metadata, original_metadata, start_time)
