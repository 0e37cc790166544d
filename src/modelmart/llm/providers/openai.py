from typing import Any

from openai import AsyncOpenAI

from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse

DEEPSEEK_BASE_URL = "https://api.deepseek.com"


class OpenAIProvider(LLMProvider):
    """OpenAI Chat Completions provider.

    Also serves OpenAI-compatible APIs (DeepSeek and friends) through
    ``base_url``.

    Hidden design decisions:
    - AsyncOpenAI client initialization
    - Message format conversion
    - Which sampling parameters are sent when unset
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        organization: str | None = None,
        **client_kwargs: Any
    ):
        """Initialize OpenAI provider.

        Args:
            api_key: API key for the OpenAI-compatible service
            model: Default model to use
            base_url: Optional custom API base URL
            organization: Optional organization ID
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        self._model = model
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            organization=organization,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        return self._model

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        top_p: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion using the Chat Completions API.

        Args:
            messages: Prompt messages
            model: Model to use (overrides default)
            temperature: Sampling temperature
            top_p: Nucleus sampling value, omitted from the request when None
            max_tokens: Maximum tokens to generate, omitted when None
            **kwargs: Additional OpenAI-specific parameters

        Returns:
            LLMResponse with generated content
        """
        request_params: dict[str, Any] = {
            "model": model or self._model,
            "messages": [
                {"role": msg.role, "content": msg.content}
                for msg in messages
            ],
            "temperature": temperature,
            **kwargs
        }
        if top_p is not None:
            request_params["top_p"] = top_p
        if max_tokens is not None:
            request_params["max_tokens"] = max_tokens

        completion = await self._client.chat.completions.create(**request_params)

        usage = None
        if completion.usage:
            usage = {
                "prompt_tokens": completion.usage.prompt_tokens,
                "completion_tokens": completion.usage.completion_tokens,
                "total_tokens": completion.usage.total_tokens
            }

        content = ""
        if completion.choices:
            content = completion.choices[0].message.content or ""

        return LLMResponse(
            content=content,
            model=completion.model,
            usage=usage
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.close()
