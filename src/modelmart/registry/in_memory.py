"""In-memory model registry.

Dict-backed storage; custom models added at runtime are lost when the
process exits.
"""

from collections.abc import Iterable

from .base import ModelRegistry
from .models import ModelProfile


class InMemoryModelRegistry(ModelRegistry):
    """Registry holding profiles in insertion order."""

    def __init__(self, profiles: Iterable[ModelProfile] = ()):
        self._profiles: dict[str, ModelProfile] = {}
        for profile in profiles:
            self.add_model(profile)

    def get(self, model_id: str) -> ModelProfile | None:
        return self._profiles.get(model_id)

    def list_models(self, category: str | None = None) -> list[ModelProfile]:
        profiles = list(self._profiles.values())
        if category:
            wanted = category.lower()
            profiles = [p for p in profiles if p.category.lower() == wanted]
        return profiles

    def add_model(self, profile: ModelProfile) -> ModelProfile:
        self._profiles[profile.id] = profile
        return profile

    def __len__(self) -> int:
        return len(self._profiles)

    @property
    def backend_type(self) -> str:
        return "memory"
