"""Introduction text shown at the top of a fresh conversation.

Greetings are data: keyed by persona id and usually loaded from the model
catalogue. Any persona without one gets the fallback template with its
title filled in, so a lookup never fails.
"""

from collections.abc import Iterable, Mapping

from ..registry import ModelProfile, ModelRegistry

FALLBACK_TEMPLATE = "Hello! I'm {title}, ready to assist you. How can I help today?"


class IntroductionCatalog:
    """Persona id -> greeting table with a guaranteed fallback."""

    def __init__(
        self,
        greetings: Mapping[str, str] | None = None,
        fallback_template: str = FALLBACK_TEMPLATE,
    ):
        self._greetings = {k: v for k, v in (greetings or {}).items() if v and v.strip()}
        self._fallback_template = fallback_template

    @classmethod
    def from_profiles(
        cls,
        profiles: Iterable[ModelProfile],
        fallback_template: str = FALLBACK_TEMPLATE,
    ) -> "IntroductionCatalog":
        greetings = {p.id: p.greeting for p in profiles if p.greeting}
        return cls(greetings, fallback_template)

    @classmethod
    def from_registry(cls, registry: ModelRegistry) -> "IntroductionCatalog":
        return cls.from_profiles(registry.list_models())

    def __contains__(self, persona_id: object) -> bool:
        return persona_id in self._greetings

    def introduction_for(self, profile: ModelProfile) -> str:
        """Greeting for the profile: table entry, then the profile's own, then the template."""
        greeting = self._greetings.get(profile.id) or profile.greeting
        if greeting and greeting.strip():
            return greeting
        # str.replace so stray braces in titles or templates cannot raise
        return self._fallback_template.replace("{title}", profile.title)
