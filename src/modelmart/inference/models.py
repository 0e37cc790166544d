"""Wire models for the inference endpoint.

Field names are snake_case in Python and camelCase on the wire:

    {
      "message": "...",
      "config": {"temperature": 0.7, "topP": 0.9, "maxTokens": 1024, "systemPrompt": "..."},
      "knowledgeContext": "...",            # omitted when absent
      "conversationHistory": [{"role": "user", "content": "..."}]
    }

Success bodies look like ``{"response": "..."}``; failures carry ``{"error": "..."}``
with a non-2xx status.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class HistoryEntry(BaseModel):
    """One prior turn of the logical dialogue."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str


class InferenceConfig(BaseModel):
    """Sampling configuration plus the persona's system prompt."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    temperature: float
    top_p: float = Field(alias="topP")
    max_tokens: int = Field(alias="maxTokens")
    system_prompt: str = Field(alias="systemPrompt")


class InferenceRequest(BaseModel):
    """A chat-completion request sent to the inference endpoint."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    message: str
    config: InferenceConfig
    knowledge_context: str | None = Field(default=None, alias="knowledgeContext")
    conversation_history: list[HistoryEntry] = Field(
        default_factory=list, alias="conversationHistory"
    )

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the camelCase JSON body."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "InferenceRequest":
        """Parse a camelCase JSON body."""
        return cls.model_validate(payload)


class InferenceResponse(BaseModel):
    """Body of a successful inference call.

    ``response`` may be missing or empty; callers treat that as a degenerate
    success rather than a failure.
    """

    model_config = ConfigDict(frozen=True)

    response: str | None = None
    usage: dict[str, Any] | None = None

    @property
    def text(self) -> str:
        return (self.response or "").strip()
