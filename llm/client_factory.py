"""
Factory for creating LLM clients.

This provides a centralized way to instantiate the correct LLM client
based on the provider configuration.
"""

from core.constants import PROVIDER_API_KEY_ENV, PROVIDER_BASE_URLS, SUPPORTED_PROVIDERS
from core.exceptions import ConfigurationError
from .llm_client_base import BaseLLMClient
from .openai_client import OpenAIClient
from .ollama_client import OllamaClient


class LLMClientFactory:
    """
    Factory class for creating LLM clients.
    """

    @staticmethod
    def create_client(
        provider: str,
        model: str,
        **kwargs
    ) -> BaseLLMClient:
        """
        Create an LLM client based on the provider.

        Args:
            provider: Provider name ('openrouter', 'openai', 'gemini' or 'ollama')
            model: Model name/identifier
            **kwargs: Provider-specific configuration
                For OpenAI-compatible providers:
                    - api_key: API key
                    - temperature: Sampling temperature
                For Ollama:
                    - ollama_base_url: Ollama server URL (default: http://localhost:11434)
                    - ollama_timeout: Request timeout in seconds (default: 300)
                    - temperature: Sampling temperature

        Returns:
            Configured LLM client instance

        Raises:
            ConfigurationError: If provider is not supported
        """
        provider = provider.lower().strip()
        temperature = kwargs.get('temperature', 0.1)

        if provider in PROVIDER_BASE_URLS:
            return OpenAIClient(
                model=model,
                api_key=kwargs.get('api_key'),
                base_url=PROVIDER_BASE_URLS[provider],
                temperature=temperature,
                api_key_env=PROVIDER_API_KEY_ENV[provider]
            )
        elif provider == 'ollama':
            return OllamaClient(
                model=model,
                base_url=kwargs.get('ollama_base_url') or 'http://localhost:11434',
                timeout=kwargs.get('ollama_timeout', 300),
                temperature=temperature
            )
        else:
            raise ConfigurationError(
                f"Unsupported LLM provider: '{provider}'. "
                f"Supported providers: {', '.join(SUPPORTED_PROVIDERS)}"
            )
