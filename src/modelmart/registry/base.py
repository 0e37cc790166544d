"""Abstract base class for model registries.

This module defines the read interface the chat layer and the marketplace
listing consume. The abstraction hides:
- Where profiles come from (bundled catalogue, YAML file, remote service)
- How listing and search are evaluated
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from .models import ModelProfile


class ModelRegistry(ABC):
    """Abstract model registry.

    Lookups never raise for unknown ids; they return ``None`` so callers can
    render a "not found" state.
    """

    @abstractmethod
    def get(self, model_id: str) -> ModelProfile | None:
        """Look up a profile by its id."""

    @abstractmethod
    def list_models(self, category: str | None = None) -> list[ModelProfile]:
        """List profiles in registration order, optionally filtered by category."""

    @abstractmethod
    def add_model(self, profile: ModelProfile) -> ModelProfile:
        """Register a custom profile, replacing any profile with the same id."""

    def search(
        self,
        query: str | None = None,
        category: str | None = None,
        tags: Iterable[str] | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[ModelProfile]:
        """Filter profiles by text, category and tag overlap, then paginate.

        Args:
            query: Substring matched against title and description
            category: Exact category (case-insensitive)
            tags: Any-of tag filter (case-insensitive)
            limit: Page size
            offset: Number of matches to skip

        Returns:
            Matching profiles in registration order
        """
        if limit < 0 or offset < 0:
            raise ValueError("limit and offset must be non-negative")

        wanted_tags = {t.lower() for t in tags} if tags else set()
        results = []
        for profile in self.list_models(category):
            if query and not profile.matches(query):
                continue
            if wanted_tags and not wanted_tags & {t.lower() for t in profile.tags}:
                continue
            results.append(profile)
        return results[offset:offset + limit]

    def categories(self) -> list[str]:
        """Distinct categories in first-seen order."""
        return list(dict.fromkeys(p.category for p in self.list_models()))

    def __contains__(self, model_id: object) -> bool:
        return isinstance(model_id, str) and self.get(model_id) is not None

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
