"""
Base abstract class for vision LLM clients.

This defines the interface that all provider implementations must follow.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


class BaseLLMClient(ABC):
    """
    Abstract base class for vision LLM clients.

    All provider implementations (OpenAI-compatible, Ollama) must inherit
    from this class and implement the abstract methods.
    """

    def __init__(self, model: str, temperature: float = 0.1, **kwargs):
        """
        Initialize the LLM client.

        Args:
            model: Model name/identifier
            temperature: Sampling temperature (low for consistent OCR output)
            **kwargs: Additional provider-specific configuration
        """
        self.model = model
        self.temperature = temperature
        self.config = kwargs

    @abstractmethod
    async def chat_completion(
        self,
        prompt: str,
        image_data_uri: Optional[str] = None,
        system_prompt: Optional[str] = None,
        **kwargs
    ) -> str:
        """
        Perform a single-turn chat completion request.

        Args:
            prompt: The user message
            image_data_uri: Optional base64 data URI of an image to attach
            system_prompt: Optional system instruction
            **kwargs: Additional parameters (max_tokens, etc.)

        Returns:
            The model's response as a string

        Raises:
            ModelInvocationError: If the provider call fails
        """
        pass

    def create_agent(self, name: str, system_prompt: str) -> "LLMAgent":
        """
        Create a named single-purpose agent bound to a system instruction.

        Args:
            name: Agent name (used for logging only)
            system_prompt: Instruction applied to every run of the agent

        Returns:
            LLMAgent bound to this client
        """
        return LLMAgent(name=name, system_prompt=system_prompt, client=self)

    async def close(self):
        """Release any underlying connections."""
        pass


@dataclass(frozen=True)
class LLMAgent:
    """A client bound to a fixed system instruction."""
    name: str
    system_prompt: str
    client: BaseLLMClient

    async def run(self, message: str, image_data_uri: Optional[str] = None, **kwargs) -> str:
        """Run the agent once on an input message."""
        return await self.client.chat_completion(
            message,
            image_data_uri=image_data_uri,
            system_prompt=self.system_prompt,
            **kwargs
        )


def split_data_uri(data_uri: str) -> tuple:
    """
    Split a ``data:<mime>;base64,<payload>`` URI.

    Returns:
        Tuple of (mime_type, base64_payload)
    """
    header, _, payload = data_uri.partition(',')
    if not header.startswith('data:') or not payload:
        raise ValueError("Not a base64 data URI")
    mime_type = header[len('data:'):].split(';', 1)[0]
    return mime_type, payload
