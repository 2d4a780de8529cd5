"""
EFIHUB client configuration.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Self

DEFAULT_TOKEN_URL = "https://efihub.morefurniture.id/oauth/token"
DEFAULT_API_URL = "https://efihub.morefurniture.id/api"


@dataclass(frozen=True, kw_only=True)
class EfihubConfig:
    """
    Attributes:
        client_id: OAuth2 client identifier.
        client_secret: OAuth2 client secret.
        token_url: Client-credentials token endpoint.
        api_url: Base URL every API path is joined onto.
        timeout: Request timeout in seconds.
        token_ttl: Seconds an access token stays cached. Kept below the
            real token lifetime so an expiring token is never served.
        token_cache_key: Cache key the access token is stored under.
        user_agent: User-Agent header value.
    """

    client_id: str
    client_secret: str
    token_url: str = DEFAULT_TOKEN_URL
    api_url: str = DEFAULT_API_URL
    timeout: float = 30.0
    token_ttl: float = 55 * 60
    token_cache_key: str = "efihub_access_token"
    user_agent: str = "Efihub-Python/0.1"

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)
        if self.token_ttl <= 0:
            msg = "token_ttl must be positive"
            raise ValueError(msg)
        if not self.token_cache_key:
            msg = "token_cache_key must not be empty"
            raise ValueError(msg)
        if not self.api_url:
            msg = "api_url must not be empty"
            raise ValueError(msg)
        if not self.token_url:
            msg = "token_url must not be empty"
            raise ValueError(msg)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Self:
        """
        Build a config from ``EFIHUB_*`` environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Returns:
            Config with unset variables falling back to defaults.
        """
        env = os.environ if environ is None else environ
        return cls(
            client_id=env.get("EFIHUB_CLIENT_ID", ""),
            client_secret=env.get("EFIHUB_CLIENT_SECRET", ""),
            token_url=env.get("EFIHUB_TOKEN_URL") or DEFAULT_TOKEN_URL,
            api_url=env.get("EFIHUB_API_URL") or DEFAULT_API_URL,
            timeout=float(env.get("EFIHUB_TIMEOUT") or 30.0),
        )
