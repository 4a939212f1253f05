"""
Vision LLM client abstraction layer.

This module provides a unified interface for different model providers
(OpenAI-compatible endpoints, Ollama) using the Strategy Pattern.
"""

from .llm_client_base import BaseLLMClient, LLMAgent
from .openai_client import OpenAIClient
from .ollama_client import OllamaClient
from .client_factory import LLMClientFactory

__all__ = [
    'BaseLLMClient',
    'LLMAgent',
    'OpenAIClient',
    'OllamaClient',
    'LLMClientFactory',
]
