"""
Model invocation strategies.

An extraction tries an ordered list of strategies, each with a different
call shape, until one returns a reply. Every attempt is raced against the
same timeout.
"""
import asyncio
from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence

from core.constants import AGENT_INPUT_MESSAGE, AGENT_NAME
from core.exceptions import ModelInvocationError
from llm.llm_client_base import BaseLLMClient


class InvocationStrategy(ABC):
    """One way of asking the model for an OCR reply."""

    name = "strategy"

    @abstractmethod
    async def invoke(self, client: BaseLLMClient, prompt: str, image_data_uri: str) -> str:
        pass


class AgentInvocation(InvocationStrategy):
    """Run a named agent whose system instruction is the OCR prompt."""

    name = "agent"

    def __init__(self, agent_name: str = AGENT_NAME, message: str = AGENT_INPUT_MESSAGE):
        self.agent_name = agent_name
        self.message = message

    async def invoke(self, client: BaseLLMClient, prompt: str, image_data_uri: str) -> str:
        agent = client.create_agent(self.agent_name, system_prompt=prompt)
        return await agent.run(self.message, image_data_uri=image_data_uri)


class DirectChatInvocation(InvocationStrategy):
    """Send the prompt and the image in a single user turn."""

    name = "direct_chat"

    async def invoke(self, client: BaseLLMClient, prompt: str, image_data_uri: str) -> str:
        return await client.chat_completion(prompt, image_data_uri=image_data_uri)


DEFAULT_STRATEGIES = (AgentInvocation(), DirectChatInvocation())


async def invoke_with_fallback(
    client: BaseLLMClient,
    prompt: str,
    image_data_uri: str,
    timeout: float,
    strategies: Sequence[InvocationStrategy] = DEFAULT_STRATEGIES,
    log: Optional[Callable[..., None]] = None
) -> str:
    """
    Try each strategy in order and return the first reply.

    Args:
        client: Model client
        prompt: OCR instruction
        image_data_uri: Prepared image as a data URI
        timeout: Seconds allowed for each attempt
        strategies: Ordered strategies to try
        log: Optional logging function for failed attempts

    Returns:
        Raw model reply

    Raises:
        ModelInvocationError: If every strategy failed or timed out
    """
    if not strategies:
        raise ModelInvocationError("No invocation strategies configured")

    failures = []
    for strategy in strategies:
        try:
            return await asyncio.wait_for(
                strategy.invoke(client, prompt, image_data_uri),
                timeout=timeout
            )
        except asyncio.TimeoutError:
            failures.append(f"{strategy.name}: OCR timeout after {timeout}s")
        except Exception as e:
            failures.append(f"{strategy.name}: {e}")
        if log:
            log(f"Invocation strategy '{strategy.name}' failed:", failures[-1])

    raise ModelInvocationError("; ".join(failures))
