"""Canned-response endpoint for offline development and demos."""

import asyncio
import random

from .base import InferenceEndpoint
from .cancellation import CancellationToken
from .models import InferenceRequest, InferenceResponse

DEFAULT_PERSONA = "general-assistant"

MOCK_RESPONSES: dict[str, list[str]] = {
    "general-assistant": [
        "I understand your question. Let me provide you with a comprehensive answer based on my knowledge.",
        "That's an interesting point. Here's what I can tell you about that topic.",
        "I'd be happy to help you with that. Based on the information available, here's my response.",
    ],
    "creative-writer": [
        "What a fascinating creative challenge! Let me craft something imaginative for you.",
        "I love exploring creative ideas. Here's an artistic take on your request.",
        "Let's dive into the realm of creativity and storytelling together.",
    ],
    "code-assistant": [
        "Looking at your code question, here's a technical solution with best practices in mind.",
        "I can help you solve this programming challenge. Let me break down the approach step by step.",
        "Here's a clean, efficient solution to your coding problem with explanations.",
    ],
    "business-advisor": [
        "From a business perspective, here's my strategic analysis and recommendations.",
        "Let me provide you with actionable business insights based on industry best practices.",
        "Here's a professional assessment of your business question with practical next steps.",
    ],
    "educational-tutor": [
        "Great question! Let me explain this concept in a way that's easy to understand.",
        "I'm here to help you learn. Let's break this topic down into manageable parts.",
        "Learning is a journey, and I'm here to guide you through this subject step by step.",
    ],
    "technical-support": [
        "I can help you troubleshoot this technical issue. Here's a systematic approach to resolve it.",
        "Let me walk you through the solution to this technical problem with clear steps.",
        "Based on the symptoms you've described, here's the most likely solution and how to implement it.",
    ],
}


class MockInferenceEndpoint(InferenceEndpoint):
    """Answers with a random canned line for one persona.

    Unknown personas fall back to the general assistant's lines.
    """

    def __init__(
        self,
        persona_id: str = DEFAULT_PERSONA,
        latency: tuple[float, float] = (0.0, 0.0),
        responses: dict[str, list[str]] | None = None,
        rng: random.Random | None = None,
    ):
        """Initialize the mock.

        Args:
            persona_id: Which persona's canned lines to use
            latency: (min, max) simulated delay in seconds
            responses: Override for the canned line table
            rng: Random source, seedable for deterministic output
        """
        low, high = latency
        if low < 0 or high < low:
            raise ValueError(f"Invalid latency range: {latency}")

        table = responses if responses is not None else MOCK_RESPONSES
        self._lines = table.get(persona_id) or table.get(DEFAULT_PERSONA) or []
        if not self._lines:
            raise ValueError(f"No canned responses available for persona {persona_id!r}")

        self._persona_id = persona_id
        self._latency = latency
        self._rng = rng or random.Random()

    async def complete(
        self,
        request: InferenceRequest,
        token: CancellationToken | None = None,
    ) -> InferenceResponse:
        if token is None:
            return await self._answer(request)
        return await token.run(self._answer(request))

    async def _answer(self, request: InferenceRequest) -> InferenceResponse:
        delay = self._rng.uniform(*self._latency)
        if delay:
            await asyncio.sleep(delay)

        line = self._rng.choice(self._lines)
        return InferenceResponse(
            response=f"{line} (Generated using {self._persona_id} with temperature {request.config.temperature})"
        )

    async def close(self) -> None:
        pass
