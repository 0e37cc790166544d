"""HTTP transport for the inference endpoint, built on httpx."""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ..config import EndpointSettings
from .base import InferenceEndpoint
from .cancellation import CancellationToken
from .errors import (
    InferenceResponseError,
    InferenceStatusError,
    InferenceTransportError,
)
from .models import InferenceRequest, InferenceResponse

logger = logging.getLogger(__name__)

MAX_ERROR_TEXT = 200


class HttpInferenceEndpoint(InferenceEndpoint):
    """POSTs requests as JSON to a remote chat-completion endpoint.

    Hidden design decisions:
    - httpx client lifetime (owned unless one is injected)
    - Authorization header construction
    - Mapping of httpx failures, statuses and bodies to InferenceError types
    """

    def __init__(
        self,
        settings: EndpointSettings,
        client: httpx.AsyncClient | None = None,
        **client_kwargs: Any
    ):
        """Initialize the endpoint.

        Args:
            settings: URL, token and timeout
            client: Optional pre-built client (not closed by this endpoint)
            **client_kwargs: Extra kwargs for the owned httpx.AsyncClient,
                e.g. ``transport`` in tests
        """
        self._settings = settings
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.timeout_seconds),
            **client_kwargs
        )

    @property
    def url(self) -> str:
        return self._settings.url

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._settings.auth_token:
            headers["Authorization"] = f"Bearer {self._settings.auth_token}"
        return headers

    async def complete(
        self,
        request: InferenceRequest,
        token: CancellationToken | None = None,
    ) -> InferenceResponse:
        if token is None:
            return await self._post(request)
        return await token.run(self._post(request))

    async def _post(self, request: InferenceRequest) -> InferenceResponse:
        try:
            response = await self._client.post(
                self._settings.url,
                json=request.to_payload(),
                headers=self._headers(),
            )
        except httpx.TimeoutException as e:
            raise InferenceTransportError(
                f"Request timed out after {self._settings.timeout_seconds}s"
            ) from e
        except httpx.HTTPError as e:
            raise InferenceTransportError(f"Request failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.is_success:
            error = data.get("error") if isinstance(data, dict) else None
            if not isinstance(error, str):
                error = response.text[:MAX_ERROR_TEXT] or None
            raise InferenceStatusError(response.status_code, error)

        if not isinstance(data, dict):
            raise InferenceResponseError("Response body is not a JSON object")

        try:
            parsed = InferenceResponse.model_validate(data)
        except ValidationError as e:
            raise InferenceResponseError(f"Malformed response payload: {e}") from e

        logger.debug("Inference call to %s succeeded (%d)", self._settings.url, response.status_code)
        return parsed

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
