"""
Prompt Builder - Instruction text sent to the vision model.
"""
from core.constants import OUTPUT_FORMATS
from core.exceptions import InvalidInputError

BASE_PROMPT = """You are an advanced OCR (Optical Character Recognition) system. Analyze the provided image and extract ALL visible text with precise coordinate information.

REQUIREMENTS:
1. Extract EVERY piece of text visible in the image, no matter how small
2. Provide precise X,Y coordinates for each text element
3. Calculate accurate width and height for each text block, and its center point
4. Estimate a confidence score from 0 to 100 for each text element
5. Assign 1-based line numbers and 1-based word indices within each line
6. Handle multiple languages and fonts
7. Preserve original text formatting and spacing

COORDINATE SYSTEM:
- Origin (0,0) is at the top-left corner of the image
- X increases going right
- Y increases going down
- All coordinates are in pixels
- centerX = x + width / 2, centerY = y + height / 2"""

COLOR_ANALYSIS = """

COLOR ANALYSIS:
- Detect the primary color of each text element
- Identify the background color behind the text when possible
- Use standard color names (red, blue, green, etc.) or hex codes (#RRGGBB)
- If a color cannot be determined, use "unknown\""""

JSON_OUTPUT = """

OUTPUT FORMAT: Return ONLY a valid JSON object with this exact structure:
{
  "rawText": "[Concatenated text from all elements]",
  "elements": [
    {
      "text": "[Extracted text]",
      "coordinates": {
        "x": [number],
        "y": [number],
        "width": [number],
        "height": [number],
        "centerX": [number],
        "centerY": [number]
      },
      "confidence": [number 0-100],
      "color": "[string, e.g. black, #RRGGBB, unknown]",
      "backgroundColor": "[string, e.g. white, #RRGGBB, unknown]",
      "lineNumber": [number, starting at 1],
      "wordIndex": [number, starting at 1]
    }
  ],
  "metadata": {
    "totalElements": [number],
    "averageConfidence": [number],
    "processingTimeMs": [number],
    "imageInfo": {
      "width": [image width],
      "height": [image height],
      "format": "[image format, e.g. png, jpeg]"
    }
  }
}

The JSON must be valid. Do NOT include any other text, markdown or explanation outside the JSON object."""

TEXT_OUTPUT = """

OUTPUT FORMAT: Return ONLY the raw extracted text, concatenated line by line. Do NOT include any coordinates, confidence scores or other metadata."""


def build_prompt(output_format: str = 'json', include_colors: bool = True) -> str:
    """
    Build the OCR instruction for the requested output shape.

    Args:
        output_format: 'json' for structured elements, 'text' for plain text
        include_colors: Ask the model for foreground/background colors

    Returns:
        Prompt text

    Raises:
        InvalidInputError: If the output format is unknown
    """
    if output_format not in OUTPUT_FORMATS:
        raise InvalidInputError(
            f"Unsupported output format '{output_format}'. Must be one of: {', '.join(OUTPUT_FORMATS)}"
        )

    prompt = BASE_PROMPT
    if include_colors:
        prompt += COLOR_ANALYSIS

    if output_format == 'json':
        return prompt + JSON_OUTPUT
    return prompt + TEXT_OUTPUT


class PromptBuilder:
    """Injectable wrapper around build_prompt."""

    def build(self, output_format: str = 'json', include_colors: bool = True) -> str:
        return build_prompt(output_format, include_colors=include_colors)
