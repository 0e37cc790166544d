"""Data models for the model registry.

A model profile is the static, read-only description of a selectable AI
persona: what the marketplace lists and what a chat session is seeded from.
"""

from pydantic import BaseModel, ConfigDict, Field


class ModelProfile(BaseModel):
    """Static metadata and default sampling configuration for a persona."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1, description="Stable persona identifier, e.g. 'code-assistant'")
    title: str = Field(min_length=1, description="Display name shown in listings")
    system_prompt: str = Field(description="Instruction prefix sent with every request")
    default_temperature: float = Field(default=0.7, description="Initial sampling temperature")
    default_top_p: float = Field(default=0.9, description="Initial nucleus sampling value")
    default_max_tokens: int = Field(default=1024, description="Initial generation length limit")
    knowledge_context: str | None = Field(
        default=None,
        description="Optional reference material appended to the prompt"
    )
    description: str = Field(default="", description="Short marketplace blurb")
    category: str = Field(default="Other", description="Marketplace category")
    tags: tuple[str, ...] = Field(default=(), description="Free-form search tags")
    greeting: str | None = Field(
        default=None,
        description="Introduction shown when a conversation starts"
    )

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match over title and description."""
        needle = query.strip().lower()
        if not needle:
            return True
        return needle in self.title.lower() or needle in self.description.lower()
