"""Factory for creating inference endpoints."""

from typing import Any

from .base import InferenceEndpoint


def create_inference_endpoint(kind: str, **config: Any) -> InferenceEndpoint:
    """Create an inference endpoint.

    Args:
        kind: Endpoint type ('http', 'provider', 'mock')
        **config: Endpoint-specific configuration
            For http:
                - settings: EndpointSettings (required)
                - client: httpx.AsyncClient | None
            For provider:
                - llm: LLMProvider (required)
                - model: str | None
            For mock:
                - persona_id: str (default: 'general-assistant')
                - latency: tuple[float, float]

    Returns:
        Initialized endpoint

    Raises:
        ValueError: If the endpoint type is not supported
        TypeError: If required configuration is missing
    """
    kind_lower = kind.lower()

    if kind_lower == "http":
        if "settings" not in config:
            raise TypeError("HTTP endpoint requires 'settings' in config")
        from .http import HttpInferenceEndpoint
        return HttpInferenceEndpoint(**config)

    if kind_lower == "provider":
        if "llm" not in config:
            raise TypeError("Provider endpoint requires 'llm' in config")
        from .provider import ProviderInferenceEndpoint
        return ProviderInferenceEndpoint(**config)

    if kind_lower == "mock":
        from .mock import MockInferenceEndpoint
        return MockInferenceEndpoint(**config)

    raise ValueError(
        f"Unsupported endpoint: {kind}. "
        f"Supported endpoints: 'http', 'provider', 'mock'"
    )
