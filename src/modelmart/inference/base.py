"""Abstract interface every inference endpoint implements."""

from abc import ABC, abstractmethod
from typing import Any

from .cancellation import CancellationToken
from .models import InferenceRequest, InferenceResponse


class InferenceEndpoint(ABC):
    """Abstract inference endpoint.

    This module hides the design decision of where text generation runs:
    a remote HTTP service, an in-process LLM provider, or canned responses.
    Implementations must:
    - Raise an ``InferenceError`` subclass for every failure mode
    - Raise ``RequestCancelledError`` when the token fires before completion
    - Never retry on their own

    Supports async context manager protocol:
        async with endpoint:
            response = await endpoint.complete(request)
    """

    @abstractmethod
    async def complete(
        self,
        request: InferenceRequest,
        token: CancellationToken | None = None,
    ) -> InferenceResponse:
        """Run one chat-completion request.

        Args:
            request: The request payload
            token: Optional cancellation token honored cooperatively

        Returns:
            InferenceResponse (``response`` may be empty)

        Raises:
            InferenceError: Transport, status or payload failure
            RequestCancelledError: The token was cancelled
        """

    @abstractmethod
    async def close(self) -> None:
        """Release any open connections."""

    async def __aenter__(self) -> "InferenceEndpoint":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
