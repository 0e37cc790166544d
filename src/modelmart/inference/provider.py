"""Inference endpoint backed by an in-process LLM provider."""

import logging

from ..llm import ChatMessage, LLMProvider
from .base import InferenceEndpoint
from .cancellation import CancellationToken
from .errors import InferenceTransportError
from .models import InferenceRequest, InferenceResponse
from .prompting import build_prompt

logger = logging.getLogger(__name__)


class ProviderInferenceEndpoint(InferenceEndpoint):
    """Serves the inference contract in-process through an LLMProvider.

    The request is flattened into one user prompt (see ``build_prompt``)
    and sent with the request's sampling configuration. Provider failures
    surface as ``InferenceTransportError``; an empty completion is returned
    as an empty response so the caller's fallback applies.
    """

    def __init__(self, llm: LLMProvider, model: str | None = None):
        self._llm = llm
        self._model = model

    async def complete(
        self,
        request: InferenceRequest,
        token: CancellationToken | None = None,
    ) -> InferenceResponse:
        if token is None:
            return await self._generate(request)
        return await token.run(self._generate(request))

    async def _generate(self, request: InferenceRequest) -> InferenceResponse:
        prompt = build_prompt(request)
        try:
            result = await self._llm.chat_completion(
                [ChatMessage(role="user", content=prompt)],
                model=self._model,
                temperature=request.config.temperature,
                top_p=request.config.top_p,
                max_tokens=request.config.max_tokens,
            )
        except Exception as e:
            raise InferenceTransportError(f"Provider call failed: {e}") from e

        logger.debug("Provider %s answered with %d characters", result.model, len(result.content))
        return InferenceResponse(response=result.content or None, usage=result.usage)

    async def close(self) -> None:
        await self._llm.close()
