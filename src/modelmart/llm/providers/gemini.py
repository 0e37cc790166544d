"""Google Gemini LLM provider implementation.

Uses the official Google GenAI SDK for async completions.
Reference: https://github.com/googleapis/python-genai

Note: Gemini can return empty candidates due to safety filtering or service
hiccups. Empty results are retried a few times before an empty string is
returned; the caller decides what an empty completion means.
"""

import asyncio
from typing import Any

from google import genai
from google.genai import types

from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse


class GeminiProvider(LLMProvider):
    """Google Gemini LLM provider.

    Hidden design decisions:
    - Google GenAI client initialization
    - Mapping of assistant turns to Gemini's "model" role
    - Retry on empty responses
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        max_retries: int = 3,
        **client_kwargs: Any
    ):
        """Initialize Gemini provider.

        Args:
            api_key: Google AI API key
            model: Default model
            max_retries: Attempts made while the response stays empty
            **client_kwargs: Additional kwargs for genai.Client
        """
        self._model = model
        self._max_retries = max(1, max_retries)
        self._client = genai.Client(api_key=api_key, **client_kwargs)

    @property
    def model(self) -> str:
        return self._model

    def _convert_messages(
        self, messages: list[ChatMessage]
    ) -> tuple[str | None, list[types.Content]]:
        """Split system instruction from user/model contents."""
        system_instruction = None
        contents = []

        for msg in messages:
            if msg.role == "system":
                system_instruction = msg.content
            else:
                contents.append(types.Content(
                    role="model" if msg.role == "assistant" else "user",
                    parts=[types.Part(text=msg.content)]
                ))

        return system_instruction, contents

    def _extract_content(self, response: Any) -> str:
        """Return the text of the first candidate, or an empty string."""
        if response.candidates:
            candidate = response.candidates[0]
            if candidate.content and candidate.content.parts:
                texts = [part.text for part in candidate.content.parts if getattr(part, "text", None)]
                if texts:
                    return "".join(texts)

        try:
            return response.text or ""
        except (ValueError, AttributeError):
            return ""

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        top_p: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a completion with Gemini.

        Args:
            messages: Prompt messages
            model: Model to use (overrides default)
            temperature: Sampling temperature
            top_p: Nucleus sampling value
            max_tokens: Maps to ``max_output_tokens``
            **kwargs: Additional GenerateContentConfig fields

        Returns:
            LLMResponse with generated content (possibly empty)
        """
        model_to_use = model or self._model
        system_instruction, contents = self._convert_messages(messages)

        config = types.GenerateContentConfig(
            temperature=temperature,
            top_p=top_p,
            max_output_tokens=max_tokens,
            system_instruction=system_instruction,
            **kwargs
        )

        content = ""
        usage = None

        for attempt in range(self._max_retries):
            response = await self._client.aio.models.generate_content(
                model=model_to_use,
                contents=contents,
                config=config
            )

            if response.usage_metadata:
                usage = {
                    "prompt_tokens": response.usage_metadata.prompt_token_count or 0,
                    "completion_tokens": response.usage_metadata.candidates_token_count or 0,
                    "total_tokens": response.usage_metadata.total_token_count or 0
                }

            content = self._extract_content(response)
            if content:
                break

            if attempt < self._max_retries - 1:
                await asyncio.sleep(0.5 * (attempt + 1))

        return LLMResponse(
            content=content,
            model=model_to_use,
            usage=usage
        )

    async def close(self) -> None:
        """Nothing to release; the GenAI client has no explicit close."""
