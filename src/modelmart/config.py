"""Explicit settings objects.

Library code receives these as constructor arguments; only the CLI edge
builds them from the process environment.
"""

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TIMEOUT_SECONDS = 60.0


class EndpointSettings(BaseModel):
    """Where and how to reach the inference endpoint."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(min_length=1, description="Full URL of the chat-completion endpoint")
    auth_token: str | None = Field(default=None, description="Bearer token, sent when set")
    timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        gt=0,
        description="Total request timeout"
    )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "EndpointSettings":
        """Build settings from environment variables.

        Environment variables:
            MODELMART_ENDPOINT_URL: Endpoint URL (required)
            MODELMART_AUTH_TOKEN: Bearer token (optional)
            MODELMART_TIMEOUT: Timeout in seconds (default: 60)

        Raises:
            ValueError: If the URL is missing or the timeout is not a number
        """
        env = os.environ if environ is None else environ
        url = env.get("MODELMART_ENDPOINT_URL", "").strip()
        if not url:
            raise ValueError("MODELMART_ENDPOINT_URL is not set")

        raw_timeout = env.get("MODELMART_TIMEOUT")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT_SECONDS
        except ValueError as e:
            raise ValueError(f"MODELMART_TIMEOUT must be a number, got {raw_timeout!r}") from e

        return cls(
            url=url,
            auth_token=env.get("MODELMART_AUTH_TOKEN") or None,
            timeout_seconds=timeout,
        )
