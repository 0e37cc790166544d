"""Data models for chat sessions."""

import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..inference.models import HistoryEntry
from ..registry.models import ModelProfile

TEMPERATURE_RANGE = (0.0, 1.0)
TOP_P_RANGE = (0.0, 1.0)
MAX_TOKENS_RANGE = (1, 4096)


class Role(str, Enum):
    """Author of a conversation message."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatState(str, Enum):
    """Per-conversation request state."""

    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting_response"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ConversationMessage(BaseModel):
    """One entry of a conversation log.

    A pending message is the assistant placeholder shown while a request is
    outstanding; it is the only message allowed to have empty content.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Identifier unique within the conversation")
    role: Role
    content: str = Field(default="")
    timestamp: datetime = Field(default_factory=_utcnow)
    is_pending: bool = Field(default=False)

    @model_validator(mode="after")
    def _content_required_unless_pending(self) -> "ConversationMessage":
        if not self.content and not self.is_pending:
            raise ValueError("content may only be empty on a pending message")
        return self

    def to_history_entry(self) -> HistoryEntry:
        return HistoryEntry(role=self.role.value, content=self.content)


def _clamp(name: str, value: Any, bounds: tuple[float, float]) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    if math.isnan(value):
        raise ValueError(f"{name} must not be NaN")
    low, high = bounds
    return min(max(value, low), high)


class GenerationConfig(BaseModel):
    """Sampling configuration for one conversation.

    Values are always inside the declared ranges; use ``clamped`` or
    ``merged`` to build from arbitrary user input.
    """

    model_config = ConfigDict(frozen=True)

    temperature: float = Field(ge=TEMPERATURE_RANGE[0], le=TEMPERATURE_RANGE[1])
    top_p: float = Field(ge=TOP_P_RANGE[0], le=TOP_P_RANGE[1])
    max_tokens: int = Field(ge=MAX_TOKENS_RANGE[0], le=MAX_TOKENS_RANGE[1])

    @classmethod
    def clamped(cls, temperature: float, top_p: float, max_tokens: float) -> "GenerationConfig":
        """Build a config, pulling out-of-range values to the nearest bound."""
        return cls(
            temperature=_clamp("temperature", temperature, TEMPERATURE_RANGE),
            top_p=_clamp("top_p", top_p, TOP_P_RANGE),
            max_tokens=int(round(_clamp("max_tokens", max_tokens, MAX_TOKENS_RANGE))),
        )

    @classmethod
    def from_profile(cls, profile: ModelProfile) -> "GenerationConfig":
        return cls.clamped(
            temperature=profile.default_temperature,
            top_p=profile.default_top_p,
            max_tokens=profile.default_max_tokens,
        )

    def merged(self, **partial: Any) -> "GenerationConfig":
        """Return a copy with the given fields replaced and clamped.

        ``None`` values are ignored.

        Raises:
            ValueError: On unknown field names or non-numeric values
        """
        unknown = set(partial) - set(type(self).model_fields)
        if unknown:
            raise ValueError(f"Unknown generation config field(s): {', '.join(sorted(unknown))}")

        values = self.model_dump()
        values.update({k: v for k, v in partial.items() if v is not None})
        return type(self).clamped(**values)
