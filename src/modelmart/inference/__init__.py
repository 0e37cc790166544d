"""Inference endpoint module for modelmart.

Request/response contract for chat completion plus the transports that
fulfil it.
"""

from .base import InferenceEndpoint
from .cancellation import CancellationToken
from .errors import (
    InferenceError,
    InferenceResponseError,
    InferenceStatusError,
    InferenceTransportError,
    RequestCancelledError,
)
from .factory import create_inference_endpoint
from .http import HttpInferenceEndpoint
from .mock import MockInferenceEndpoint
from .models import HistoryEntry, InferenceConfig, InferenceRequest, InferenceResponse
from .prompting import build_prompt
from .provider import ProviderInferenceEndpoint

__all__ = [
    "CancellationToken",
    "HistoryEntry",
    "HttpInferenceEndpoint",
    "InferenceConfig",
    "InferenceEndpoint",
    "InferenceError",
    "InferenceRequest",
    "InferenceResponse",
    "InferenceResponseError",
    "InferenceStatusError",
    "InferenceTransportError",
    "MockInferenceEndpoint",
    "ProviderInferenceEndpoint",
    "RequestCancelledError",
    "build_prompt",
    "create_inference_endpoint",
]
