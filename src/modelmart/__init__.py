"""
modelmart: a marketplace of AI personas with a chat session controller.

Each sub-package hides one design decision: where profiles come from
(registry), how text is generated (inference, llm), and how a conversation
is managed (chat).
"""

__version__ = "0.1.0"

from .chat import ChatSessionController, ConversationMessage, GenerationConfig
from .config import EndpointSettings
from .inference import InferenceEndpoint, InferenceRequest, create_inference_endpoint
from .registry import ModelProfile, ModelRegistry, create_model_registry

__all__ = [
    "ChatSessionController",
    "ConversationMessage",
    "EndpointSettings",
    "GenerationConfig",
    "InferenceEndpoint",
    "InferenceRequest",
    "ModelProfile",
    "ModelRegistry",
    "create_inference_endpoint",
    "create_model_registry",
]
