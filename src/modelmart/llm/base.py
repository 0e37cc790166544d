from abc import ABC, abstractmethod
from typing import Any

from .models import ChatMessage, LLMResponse


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    This module hides the design decision of which hosted model actually
    generates text behind an inference endpoint. Implementations handle:
    - SDK client setup and authentication
    - Conversion of chat messages to the provider's wire format
    - Mapping of sampling parameters (temperature, top_p, max tokens)

    Supports async context manager protocol for resource cleanup:
        async with provider:
            response = await provider.chat_completion(messages)
    """

    @abstractmethod
    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        top_p: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion.

        Args:
            messages: Messages forming the prompt
            model: Model to use (None uses provider's default)
            temperature: Sampling temperature
            top_p: Nucleus sampling probability mass (None uses provider default)
            max_tokens: Maximum tokens to generate
            **kwargs: Provider-specific parameters

        Returns:
            LLMResponse containing generated content and metadata

        Raises:
            Exception: Provider-specific errors during generation
        """

    @property
    @abstractmethod
    def model(self) -> str:
        """Default model name used when none is passed."""

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "LLMProvider":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Close the provider on exit.

        Suppresses "Event loop is closed" errors raised by httpx/anyio when the
        loop is torn down before the client:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
