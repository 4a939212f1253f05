"""
Constants and configuration values for OCR workflow.

Provider tables are read-only mappings shared by the whole process.
"""
from types import MappingProxyType

SUPPORTED_PROVIDERS = ('openrouter', 'openai', 'gemini', 'ollama')

# Providers that run locally and need no API key
LOCAL_PROVIDERS = ('ollama',)

DEFAULT_MODELS = MappingProxyType({
    'openrouter': 'google/gemini-2.0-flash-exp:free',
    'openai': 'gpt-4o-mini',
    'gemini': 'gemini-2.0-flash-exp',
    'ollama': 'llava'
})

AVAILABLE_MODELS = MappingProxyType({
    'openrouter': (
        'google/gemini-2.0-flash-exp:free',
        'anthropic/claude-3-sonnet',
        'openai/gpt-4o-mini',
        'meta-llama/llama-3.2-90b-vision-instruct'
    ),
    'openai': (
        'gpt-4o',
        'gpt-4o-mini',
        'gpt-4-turbo'
    ),
    'gemini': (
        'gemini-2.0-flash-exp',
        'gemini-1.5-pro',
        'gemini-1.5-flash'
    ),
    'ollama': (
        'llava',
        'llava:13b',
        'llava:34b',
        'bakllava'
    )
})

# OpenAI-compatible endpoints; None means the SDK default
PROVIDER_BASE_URLS = MappingProxyType({
    'openai': None,
    'openrouter': 'https://openrouter.ai/api/v1',
    'gemini': 'https://generativelanguage.googleapis.com/v1beta/openai/'
})

# Environment variables consulted for each provider's key
PROVIDER_API_KEY_ENV = MappingProxyType({
    'openai': 'OPENAI_API_KEY',
    'openrouter': 'OPENROUTER_API_KEY',
    'gemini': 'GEMINI_API_KEY'
})

DEFAULT_OLLAMA_BASE_URL = 'http://localhost:11434'

# Image preparation defaults
DEFAULT_IMAGE_OPTIONS = MappingProxyType({
    'max_width': 2048,
    'max_height': 2048,
    'quality': 90,
    'sharpen': True,
    'normalize': True
})

# Extraction defaults
DEFAULT_OCR_PARAMS = MappingProxyType({
    'format': 'json',
    'include_colors': True,
    'timeout': 30.0,
    'concurrency': 3,
    'temperature': 0.1
})

OUTPUT_FORMATS = ('json', 'text')

# Normalizer defaults
DEFAULT_CONFIDENCE = 50
UNKNOWN_COLOR = 'unknown'
WORDS_PER_LINE_GUESS = 10

AGENT_NAME = 'VisionOCRAgent'
AGENT_INPUT_MESSAGE = 'Please analyze this image and extract all text with coordinates.'

LOG_PREFIX = '[VisionOCR]'
