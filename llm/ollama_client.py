"""
Ollama client implementation.

This wraps the Ollama API and implements the BaseLLMClient interface.
"""

import httpx
import json
from typing import Dict, List, Optional

from core.exceptions import ModelInvocationError
from .llm_client_base import BaseLLMClient, split_data_uri


class OllamaClient(BaseLLMClient):
    """
    LLM client for Ollama (local vision model server).
    """

    def __init__(
        self,
        model: str,
        base_url: str = "http://localhost:11434",
        timeout: int = 300,
        temperature: float = 0.1,
        **kwargs
    ):
        """
        Initialize Ollama client.

        Args:
            model: Ollama model name (e.g., 'llava', 'llava:13b')
            base_url: Ollama server URL (default: http://localhost:11434)
            timeout: Request timeout in seconds (default: 300)
            temperature: Sampling temperature
            **kwargs: Additional configuration
        """
        super().__init__(model, temperature=temperature, **kwargs)

        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

        # Create async HTTP client
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout)
        )

    @staticmethod
    def build_messages(
        prompt: str,
        image_data_uri: Optional[str] = None,
        system_prompt: Optional[str] = None
    ) -> List[Dict]:
        """Build Ollama chat messages; images travel as raw base64."""
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})

        user_message = {"role": "user", "content": prompt}
        if image_data_uri:
            _, payload = split_data_uri(image_data_uri)
            user_message["images"] = [payload]
        messages.append(user_message)
        return messages

    async def chat_completion(
        self,
        prompt: str,
        image_data_uri: Optional[str] = None,
        system_prompt: Optional[str] = None,
        **kwargs
    ) -> str:
        """
        Call Ollama chat completion API.

        Args:
            prompt: User message
            image_data_uri: Optional image to attach
            system_prompt: Optional system instruction
            **kwargs: Additional parameters (temperature, etc.)

        Returns:
            Model response text

        Raises:
            ModelInvocationError: If the server is unreachable or returns an error
        """
        # Prepare request payload
        payload = {
            "model": self.model,
            "messages": self.build_messages(prompt, image_data_uri, system_prompt),
            "stream": False,
            "options": {
                "temperature": kwargs.get('temperature', self.temperature)
            }
        }

        try:
            # Call Ollama API
            response = await self.client.post("/api/chat", json=payload)
            response.raise_for_status()

            # Parse response
            result = response.json()
            return result['message']['content'].strip()

        except httpx.ConnectError as e:
            raise ModelInvocationError(
                f"Could not connect to Ollama server at {self.base_url}. "
                f"Please ensure Ollama is running (e.g., 'ollama serve') and "
                f"you have pulled the model (e.g., 'ollama pull {self.model}'). "
                f"Error: {e}"
            ) from e
        except httpx.HTTPStatusError as e:
            raise ModelInvocationError(
                f"Ollama server returned error: {e.response.status_code} - {e.response.text}"
            ) from e
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            raise ModelInvocationError(
                f"Invalid response from Ollama: {response.text[:200]}"
            ) from e

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
