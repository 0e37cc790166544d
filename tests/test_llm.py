"""Unit tests for the LLM provider module."""
import os
from types import SimpleNamespace

import pytest
from hypothesis import given
from hypothesis import strategies as st

from modelmart.llm import (
    ChatMessage,
    GeminiProvider,
    LLMProvider,
    LLMResponse,
    OpenAIProvider,
    create_llm_provider,
)
from modelmart.llm.providers import DEEPSEEK_BASE_URL


class _Recorder:
    """Async callable that records kwargs and returns a canned result."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = []

    async def __call__(self, **kwargs):
        self.calls.append(kwargs)
        return self.results.pop(0)


def _openai_completion(content):
    return SimpleNamespace(
        model="gpt-4o-mini",
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(prompt_tokens=3, completion_tokens=4, total_tokens=7),
    )


def _gemini_response(text):
    parts = [SimpleNamespace(text=text)] if text else []
    return SimpleNamespace(
        candidates=[SimpleNamespace(content=SimpleNamespace(parts=parts))],
        text=text,
        usage_metadata=None,
    )


class TestLLMProviderInterface:
    """Tests for the abstract LLMProvider interface."""

    def test_provider_is_abstract(self):
        """Test that LLMProvider cannot be instantiated directly."""
        with pytest.raises(TypeError):
            LLMProvider()  # type: ignore


class TestLLMFactory:
    """Tests for create_llm_provider."""

    def test_create_openai(self):
        """Test creating the OpenAI provider."""
        provider = create_llm_provider("openai", api_key="fake-key")
        assert isinstance(provider, OpenAIProvider)
        assert provider.model == "gpt-4o-mini"

    def test_create_deepseek(self):
        """Test that DeepSeek reuses the OpenAI provider with its own defaults."""
        provider = create_llm_provider("DeepSeek", api_key="fake-key")
        assert isinstance(provider, OpenAIProvider)
        assert provider.model == "deepseek-chat"
        assert str(provider._client.base_url).startswith(DEEPSEEK_BASE_URL)

    def test_create_gemini(self):
        """Test creating the Gemini provider."""
        provider = create_llm_provider("gemini", api_key="fake-key", model="gemini-2.0-flash")
        assert isinstance(provider, GeminiProvider)
        assert provider.model == "gemini-2.0-flash"

    @pytest.mark.parametrize("name", ["openai", "deepseek", "gemini"])
    def test_missing_api_key(self, name):
        """Test that the API key is required."""
        with pytest.raises(TypeError, match="api_key"):
            create_llm_provider(name)

    @given(st.text().filter(lambda s: s.lower() not in ("openai", "deepseek", "gemini")))
    def test_unknown_provider(self, name):
        """Property test: any other provider name is rejected."""
        with pytest.raises(ValueError, match="Unsupported provider"):
            create_llm_provider(name, api_key="fake-key")


class TestOpenAIProvider:
    """Tests for OpenAIProvider with a stubbed client."""

    @pytest.mark.asyncio
    async def test_sampling_parameters_sent(self):
        """Test that top_p and max_tokens are forwarded when set."""
        provider = OpenAIProvider(api_key="fake-key")
        create = _Recorder(_openai_completion("Hello"))
        provider._client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))

        result = await provider.chat_completion(
            [ChatMessage(role="user", content="hi")],
            temperature=0.2, top_p=0.5, max_tokens=64,
        )

        assert result == LLMResponse(
            content="Hello",
            model="gpt-4o-mini",
            usage={"prompt_tokens": 3, "completion_tokens": 4, "total_tokens": 7},
        )
        sent = create.calls[0]
        assert sent["messages"] == [{"role": "user", "content": "hi"}]
        assert (sent["temperature"], sent["top_p"], sent["max_tokens"]) == (0.2, 0.5, 64)

    @pytest.mark.asyncio
    async def test_unset_parameters_omitted(self):
        """Test that unset optional parameters are left to the API default."""
        provider = OpenAIProvider(api_key="fake-key")
        create = _Recorder(_openai_completion(None))
        provider._client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))

        result = await provider.chat_completion([ChatMessage(role="user", content="hi")])

        assert result.content == ""
        assert "top_p" not in create.calls[0]
        assert "max_tokens" not in create.calls[0]


class TestGeminiProvider:
    """Tests for GeminiProvider with a stubbed client."""

    def test_convert_messages(self):
        """Test system extraction and the assistant-to-model role mapping."""
        provider = GeminiProvider(api_key="fake-key")

        system, contents = provider._convert_messages([
            ChatMessage(role="system", content="Be nice."),
            ChatMessage(role="user", content="hi"),
            ChatMessage(role="assistant", content="hello"),
        ])

        assert system == "Be nice."
        assert [c.role for c in contents] == ["user", "model"]
        assert contents[1].parts[0].text == "hello"

    @pytest.mark.asyncio
    async def test_config_mapping(self):
        """Test that sampling parameters land in GenerateContentConfig."""
        provider = GeminiProvider(api_key="fake-key", max_retries=1)
        generate = _Recorder(_gemini_response("Hi!"))
        provider._client = SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=generate)))

        result = await provider.chat_completion(
            [ChatMessage(role="user", content="hi")],
            temperature=0.4, top_p=0.8, max_tokens=128,
        )

        assert result.content == "Hi!"
        config = generate.calls[0]["config"]
        assert (config.temperature, config.top_p, config.max_output_tokens) == (0.4, 0.8, 128)

    @pytest.mark.asyncio
    async def test_empty_response_retried(self):
        """Test that an empty candidate triggers another attempt."""
        provider = GeminiProvider(api_key="fake-key", max_retries=2)
        generate = _Recorder(_gemini_response(""), _gemini_response("Second try"))
        provider._client = SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=generate)))

        result = await provider.chat_completion([ChatMessage(role="user", content="hi")])

        assert result.content == "Second try"
        assert len(generate.calls) == 2

    @pytest.mark.asyncio
    @pytest.mark.integration
    async def test_chat_completion_real_api(self):
        """Integration test: Generate a completion with the real API."""
        api_key = os.getenv("GEMINI_API_KEY")
        if not api_key:
            pytest.skip("GEMINI_API_KEY not set")

        async with GeminiProvider(api_key=api_key) as provider:
            result = await provider.chat_completion(
                [ChatMessage(role="user", content="Reply with the word pong.")],
                max_tokens=16,
            )

        assert isinstance(result, LLMResponse)
