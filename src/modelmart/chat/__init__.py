"""Chat session module for modelmart.

The controller that manages one conversation against an inference endpoint.
"""

from .clipboard import ClipboardError, ClipboardSink, InMemoryClipboard, TerminalClipboard
from .controller import (
    EMPTY_RESPONSE_FALLBACK,
    ERROR_MESSAGE,
    ChatSessionController,
)
from .introductions import FALLBACK_TEMPLATE, IntroductionCatalog
from .models import (
    MAX_TOKENS_RANGE,
    TEMPERATURE_RANGE,
    TOP_P_RANGE,
    ChatState,
    ConversationMessage,
    GenerationConfig,
    Role,
)

__all__ = [
    "EMPTY_RESPONSE_FALLBACK",
    "ERROR_MESSAGE",
    "FALLBACK_TEMPLATE",
    "MAX_TOKENS_RANGE",
    "TEMPERATURE_RANGE",
    "TOP_P_RANGE",
    "ChatSessionController",
    "ChatState",
    "ClipboardError",
    "ClipboardSink",
    "ConversationMessage",
    "GenerationConfig",
    "InMemoryClipboard",
    "IntroductionCatalog",
    "Role",
    "TerminalClipboard",
]
