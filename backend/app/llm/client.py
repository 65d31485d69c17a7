"""LLM completion client with OpenAI integration.

Security: Reads API key from environment only, never hardcoded.
The client is built once per process and only read afterwards.
"""

import logging
from functools import lru_cache
from typing import Protocol

from openai import AsyncOpenAI, OpenAIError

from backend.app.config import get_settings
from backend.app.errors import EmptyCompletionError, ProviderError

logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    """Protocol for chat-completion client implementations."""

    async def complete(
        self,
        *,
        messages: list[dict[str, str]],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Send a chat conversation and return the assistant text.

        Args:
            messages: Chat messages ({"role": ..., "content": ...})
            temperature: Sampling temperature (None = provider default)
            max_tokens: Completion length cap (None = provider default)

        Returns:
            Completion text, never empty

        Raises:
            ProviderError: On transport, auth or quota failure
            EmptyCompletionError: If the provider returned no content
        """
        ...


class OpenAIClient:
    """OpenAI-backed completion client."""

    def __init__(self, api_key: str, model: str = "gpt-4o"):
        """Initialize OpenAI client.

        Args:
            api_key: OpenAI API key (read from environment)
            model: Model name, fixed for the lifetime of the client
        """
        self.client = AsyncOpenAI(api_key=api_key)
        self.model = model

    async def complete(
        self,
        *,
        messages: list[dict[str, str]],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a completion using the OpenAI chat API."""
        kwargs: dict[str, object] = {"model": self.model, "messages": messages}
        if temperature is not None:
            kwargs["temperature"] = temperature
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens

        try:
            response = await self.client.chat.completions.create(**kwargs)  # type: ignore[call-overload]
        except OpenAIError as e:
            logger.error(f"OpenAI API call failed: {e}")
            raise ProviderError("Completion provider request failed") from e

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            logger.warning("OpenAI returned empty response")
            raise EmptyCompletionError("No content received from the model", raw=content)

        return content


@lru_cache
def get_completion_client() -> CompletionClient:
    """Get the process-wide completion client.

    Returns:
        OpenAIClient built from settings

    Raises:
        ProviderError: If no API key is configured
    """
    settings = get_settings()
    api_key = settings.openai_api_key

    if not api_key or not api_key.get_secret_value():
        logger.error("No OpenAI API key configured")
        raise ProviderError("Completion provider is not configured")

    logger.info(f"Using OpenAI client with model {settings.openai_model}")
    return OpenAIClient(api_key=api_key.get_secret_value(), model=settings.openai_model)
