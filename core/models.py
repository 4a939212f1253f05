"""
Core domain models for OCR workflow.

These are pure data structures without business logic. ``to_dict`` emits
the camelCase shape that the model is asked to produce and that the API
returns.
"""
import base64
from collections import abc
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence, Union


@dataclass
class ImageMetadata:
    """Dimensions and format of an encoded image."""
    width: int
    height: int
    format: str = "unknown"
    mode: str = ""
    size_bytes: int = 0


@dataclass
class PreparedImage:
    """Encoded image ready to be sent to the model."""
    buffer: bytes
    metadata: ImageMetadata
    original_metadata: ImageMetadata

    @property
    def mime_type(self) -> str:
        fmt = (self.metadata.format or 'jpeg').lower()
        return f"image/{fmt}"

    def to_base64(self) -> str:
        return base64.b64encode(self.buffer).decode()

    def to_data_uri(self) -> str:
        """Embed the buffer as a base64 data URI."""
        return f"data:{self.mime_type};base64,{self.to_base64()}"


@dataclass
class TextCoordinates:
    """Bounding box of a text element in processed-image pixels."""
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0
    center_x: float = 0
    center_y: float = 0

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'x': self.x,
            'y': self.y,
            'width': self.width,
            'height': self.height,
            'centerX': self.center_x,
            'centerY': self.center_y
        }


@dataclass
class OCRTextElement:
    """A single text fragment reported by the model."""
    text: str = ""
    coordinates: TextCoordinates = field(default_factory=TextCoordinates)
    confidence: float = 50
    color: str = "unknown"
    background_color: str = "unknown"
    line_number: int = 1
    word_index: int = 1

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'text': self.text,
            'coordinates': self.coordinates.to_dict(),
            'confidence': self.confidence,
            'color': self.color,
            'backgroundColor': self.background_color,
            'lineNumber': self.line_number,
            'wordIndex': self.word_index
        }


@dataclass
class ImageInfo:
    """Original image facts plus the processed size."""
    width: int
    height: int
    format: str
    processed_width: int
    processed_height: int

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'width': self.width,
            'height': self.height,
            'format': self.format,
            'processedWidth': self.processed_width,
            'processedHeight': self.processed_height
        }


@dataclass
class OCRMetadata:
    """Summary of an extraction."""
    total_elements: int
    average_confidence: float
    processing_time_ms: int
    image_info: ImageInfo

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'totalElements': self.total_elements,
            'averageConfidence': self.average_confidence,
            'processingTimeMs': self.processing_time_ms,
            'imageInfo': self.image_info.to_dict()
        }


@dataclass
class OCRResult:
    """Structured output of a JSON-format extraction."""
    raw_text: str
    elements: List[OCRTextElement]
    metadata: OCRMetadata
    is_fallback: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'rawText': self.raw_text,
            'elements': [element.to_dict() for element in self.elements],
            'metadata': self.metadata.to_dict()
        }


RegionLike = Union["Region", Mapping[str, Any], Sequence[float]]


@dataclass(frozen=True)
class Region:
    """Rectangular sub-area of the source image, in original pixels."""
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_value(cls, value: RegionLike) -> "Region":
        """
        Build a Region from a Region, a mapping or an ``(x, y, w, h)`` sequence.

        Raises:
            ValueError: If the value cannot be interpreted as a region
        """
        if isinstance(value, Region):
            return value
        try:
            if isinstance(value, abc.Mapping):
                return cls(
                    x=float(value['x']),
                    y=float(value['y']),
                    width=float(value['width']),
                    height=float(value['height'])
                )
            if isinstance(value, (list, tuple)) and len(value) == 4:
                x, y, width, height = (float(v) for v in value)
                return cls(x=x, y=y, width=width, height=height)
        except KeyError as e:
            raise ValueError(f"Region is missing key {e}") from e
        except TypeError as e:
            raise ValueError(f"Region values must be numeric: {value!r}") from e
        raise ValueError(f"Cannot interpret {value!r} as a region")

    def scaled(self, factor_x: float, factor_y: float) -> "Region":
        """Return the region scaled into another pixel space."""
        return Region(
            x=self.x * factor_x,
            y=self.y * factor_y,
            width=self.width * factor_x,
            height=self.height * factor_y
        )

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary."""
        return {
            'x': self.x,
            'y': self.y,
            'width': self.width,
            'height': self.height
        }
