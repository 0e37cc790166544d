from typing import Any

from .base import LLMProvider
from .providers import DEEPSEEK_BASE_URL, GeminiProvider, OpenAIProvider

# name -> (class, display name, defaults applied before construction)
PROVIDERS: dict[str, tuple[type[LLMProvider], str, dict[str, Any]]] = {
    "openai": (OpenAIProvider, "OpenAI", {}),
    "deepseek": (OpenAIProvider, "DeepSeek", {"model": "deepseek-chat", "base_url": DEEPSEEK_BASE_URL}),
    "gemini": (GeminiProvider, "Gemini", {}),
}


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Create an LLM provider instance.

    DeepSeek speaks the OpenAI wire protocol, so it is served by
    ``OpenAIProvider`` with its own model and base URL defaults.

    Args:
        provider: Provider type ('openai', 'deepseek', 'gemini'), case-insensitive
        **config: Provider-specific configuration; ``api_key`` is always required.
            Optional: ``model``, plus ``base_url``/``organization`` for the
            OpenAI-compatible providers and ``max_retries`` for Gemini.

    Returns:
        Initialized LLM provider instance

    Raises:
        ValueError: If provider type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> provider = create_llm_provider("gemini", api_key="...")
    """
    entry = PROVIDERS.get(provider.lower())
    if entry is None:
        raise ValueError(
            f"Unsupported provider: {provider}. "
            f"Supported providers: {', '.join(repr(name) for name in PROVIDERS)}"
        )

    cls, display_name, defaults = entry
    if "api_key" not in config:
        raise TypeError(f"{display_name} provider requires 'api_key' in config")
    return cls(**{**defaults, **config})
