"""
OpenAI-compatible client implementation.

Wraps the OpenAI SDK and implements the BaseLLMClient interface. OpenRouter
and Gemini expose OpenAI-compatible endpoints and reuse this client with a
different base URL.
"""

import os
from typing import Dict, List, Optional

import openai
from openai import AsyncOpenAI

from core.exceptions import ConfigurationError, ModelInvocationError
from .llm_client_base import BaseLLMClient


class OpenAIClient(BaseLLMClient):
    """
    LLM client for OpenAI-compatible chat completion APIs.
    """

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        temperature: float = 0.1,
        api_key_env: str = 'OPENAI_API_KEY',
        **kwargs
    ):
        """
        Initialize OpenAI client.

        Args:
            model: Model name (e.g., 'gpt-4o-mini')
            api_key: API key (defaults to the api_key_env variable)
            base_url: Alternative OpenAI-compatible endpoint
            temperature: Sampling temperature
            api_key_env: Environment variable holding this endpoint's key
            **kwargs: Additional configuration
        """
        super().__init__(model, temperature=temperature, **kwargs)

        # Get API key from parameter or the endpoint's own environment variable
        self.api_key = api_key or os.getenv(api_key_env)
        if not self.api_key:
            raise ConfigurationError(
                f"API key not found. Please set {api_key_env} environment variable "
                "or pass api_key parameter."
            )
        self.base_url = base_url

        # Initialize async client
        self.client = AsyncOpenAI(api_key=self.api_key, base_url=base_url)

    @staticmethod
    def build_messages(
        prompt: str,
        image_data_uri: Optional[str] = None,
        system_prompt: Optional[str] = None
    ) -> List[Dict]:
        """Build chat messages with an optional image content part."""
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})

        if image_data_uri:
            content = [
                {"type": "text", "text": prompt},
                {"type": "image_url", "image_url": {"url": image_data_uri}}
            ]
        else:
            content = prompt
        messages.append({"role": "user", "content": content})
        return messages

    async def chat_completion(
        self,
        prompt: str,
        image_data_uri: Optional[str] = None,
        system_prompt: Optional[str] = None,
        **kwargs
    ) -> str:
        """
        Call the chat completion API.

        Args:
            prompt: User message
            image_data_uri: Optional image attached as an image_url part
            system_prompt: Optional system instruction
            **kwargs: Additional parameters (max_tokens, etc.)

        Returns:
            Model response text
        """
        kwargs.setdefault('temperature', self.temperature)
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=self.build_messages(prompt, image_data_uri, system_prompt),
                **kwargs
            )
        except openai.APIConnectionError as e:
            raise ModelInvocationError(
                f"Could not connect to {self.base_url or 'OpenAI API'}: {e}"
            ) from e
        except openai.APIStatusError as e:
            raise ModelInvocationError(
                f"Provider returned error: {e.status_code} - {e.message}"
            ) from e

        if not response.choices:
            raise ModelInvocationError("Provider returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise ModelInvocationError("Provider returned an empty message")
        return content.strip()

    async def close(self):
        """Close the HTTP client."""
        await self.client.close()
