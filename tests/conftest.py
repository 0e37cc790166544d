"""Pytest configuration and shared fixtures."""
import asyncio

import httpx
import pytest

from modelmart.config import EndpointSettings
from modelmart.inference import (
    CancellationToken,
    HttpInferenceEndpoint,
    InferenceEndpoint,
    InferenceRequest,
    InferenceResponse,
)
from modelmart.registry import ModelProfile


class FakeEndpoint(InferenceEndpoint):
    """In-process endpoint that records requests and answers on demand.

    With ``gated=True`` every call blocks until ``release`` is set, which
    lets tests observe the controller while a request is outstanding.
    """

    def __init__(
        self,
        response: str | None = "Hi there",
        error: BaseException | None = None,
        gated: bool = False,
        honor_token: bool = True,
    ):
        self.requests: list[InferenceRequest] = []
        self.tokens: list[CancellationToken | None] = []
        self.response = response
        self.error = error
        self.release = asyncio.Event() if gated else None
        self.honor_token = honor_token
        self.closed = False

    async def complete(self, request, token=None):
        self.requests.append(request)
        self.tokens.append(token)

        async def _answer():
            if self.release is not None:
                await self.release.wait()
            if self.error is not None:
                raise self.error
            return InferenceResponse(response=self.response)

        if token is None or not self.honor_token:
            return await _answer()
        return await token.run(_answer())

    async def close(self):
        self.closed = True


@pytest.fixture
def make_endpoint():
    """Factory for FakeEndpoint instances."""
    return FakeEndpoint


@pytest.fixture
def profile():
    """A persona with a greeting and knowledge context."""
    return ModelProfile(
        id="general-assistant",
        title="General Assistant",
        system_prompt="You are a helpful assistant.",
        default_temperature=0.7,
        default_top_p=0.9,
        default_max_tokens=1024,
        knowledge_context="The office opens at 9am.",
        category="Conversational AI",
        tags=("general", "assistant"),
        greeting="Hello! I'm your General Assistant.",
    )


@pytest.fixture
def endpoint_settings():
    """Settings pointing at a fake URL."""
    return EndpointSettings(
        url="https://inference.example.test/functions/v1/chat",
        auth_token="anon-key",
        timeout_seconds=5.0,
    )


@pytest.fixture
def make_http_endpoint(endpoint_settings):
    """Build an HttpInferenceEndpoint backed by an httpx.MockTransport.

    The returned factory takes a handler ``(httpx.Request) -> httpx.Response``
    and returns ``(endpoint, captured_requests)``.
    """
    def _make(handler):
        captured: list[httpx.Request] = []

        async def _record(request: httpx.Request):
            captured.append(request)
            result = handler(request)
            if asyncio.iscoroutine(result):
                result = await result
            return result

        endpoint = HttpInferenceEndpoint(
            endpoint_settings,
            transport=httpx.MockTransport(_record),
        )
        return endpoint, captured

    return _make
