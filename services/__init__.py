"""Services package - Image preparation, prompting, parsing and orchestration."""

from .image_processor import ImageProcessor, clamp_region
from .prompt_builder import PromptBuilder, build_prompt
from .result_parser import ResultParser, parse_json_result
from .invocation import (
    InvocationStrategy,
    AgentInvocation,
    DirectChatInvocation,
    invoke_with_fallback
)
from .ocr_service import OCRService, OCRComponents

__all__ = [
    'ImageProcessor',
    'clamp_region',
    'PromptBuilder',
    'build_prompt',
    'ResultParser',
    'parse_json_result',
    'InvocationStrategy',
    'AgentInvocation',
    'DirectChatInvocation',
    'invoke_with_fallback',
    'OCRService',
    'OCRComponents'
]
