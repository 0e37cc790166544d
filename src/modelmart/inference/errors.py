"""Exceptions raised by inference endpoints.

Every way a request can fail to produce a usable payload maps to an
``InferenceError`` subclass, so callers can recover with a single except
clause. Cancellation is deliberately not an ``InferenceError``: it is a
requested outcome, not a failure.
"""


class InferenceError(Exception):
    """Base class for inference failures."""


class InferenceTransportError(InferenceError):
    """Network failure, timeout, or provider call failure."""


class InferenceStatusError(InferenceError):
    """Endpoint answered with a non-2xx status."""

    def __init__(self, status_code: int, error: str | None = None):
        self.status_code = status_code
        self.error = error
        detail = f": {error}" if error else ""
        super().__init__(f"Inference endpoint returned HTTP {status_code}{detail}")


class InferenceResponseError(InferenceError):
    """Endpoint answered 2xx with a body that is not a valid response payload."""


class RequestCancelledError(Exception):
    """The request was cancelled through its CancellationToken."""
