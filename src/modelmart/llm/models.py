from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """A single message handed to an LLM provider."""

    model_config = ConfigDict(frozen=True)

    role: Literal["system", "user", "assistant"] = Field(
        description="Role of the message sender"
    )
    content: str = Field(description="Content of the message")


class LLMResponse(BaseModel):
    """Completion returned by an LLM provider."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Generated text content, empty if the model returned nothing")
    model: str = Field(description="Model that generated the response")
    usage: dict[str, int] | None = Field(
        default=None,
        description="Token usage information"
    )
