"""Configuration container for the Fireblocks client."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_BASE_URL = "https://api.fireblocks.io"
SANDBOX_BASE_URL = "https://sandbox-api.fireblocks.io"
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_TOKEN_TTL = 30


@dataclass(frozen=True)
class FireblocksConfig:
    """Credentials and transport settings for the Fireblocks API."""

    api_key: str
    private_key: str = field(repr=False)
    base_url: str | None = None
    sandbox: bool = False
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    token_ttl: int = DEFAULT_TOKEN_TTL

    def resolved_base_url(self) -> str:
        """Return the API base URL, defaulting to the official endpoints."""

        if self.base_url:
            return self.base_url.rstrip("/")
        return SANDBOX_BASE_URL if self.sandbox else DEFAULT_BASE_URL
