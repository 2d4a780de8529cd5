"""
HTTP client for the EFIHUB API.

Provides a clean interface for making authenticated API requests with
cached client-credentials tokens and a single retry on 401.
"""

from collections.abc import Callable, Mapping
from contextlib import ExitStack
from typing import Any, Self

import httpx
import structlog

from efihub.api.multipart import resolve_files
from efihub.api.oauth import fetch_access_token
from efihub.config import EfihubConfig
from efihub.core.cache import CacheBackend, MemoryCache
from efihub.core.token_cache import TokenCache
from efihub.exceptions import NetworkError
from efihub.models.upload import FileSpec

logger = structlog.get_logger(__name__)

SENSITIVE_KEYS = frozenset(
    {
        "access_token",
        "authorization",
        "client_secret",
        "password",
        "redirect_token",
        "refresh_token",
        "token",
    }
)

_Send = Callable[[httpx.Client, dict[str, str]], httpx.Response]


def sanitize_for_log(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Remove sensitive fields from a mapping before logging.

    Recursively sanitizes nested dictionaries and lists. Keys are matched
    case-insensitively.

    Args:
        data: Mapping that may contain sensitive values.

    Returns:
        Copy with sensitive values replaced by "***".
    """
    result = {}
    for key, value in data.items():
        if str(key).lower() in SENSITIVE_KEYS:
            result[key] = "***"
        elif isinstance(value, Mapping):
            result[key] = sanitize_for_log(value)
        elif isinstance(value, list):
            result[key] = [
                sanitize_for_log(item) if isinstance(item, Mapping) else item for item in value
            ]
        else:
            result[key] = value
    return result


def join_url(base: str, path: str) -> str:
    """Join ``base`` and ``path`` with exactly one slash between them."""
    return f"{base.rstrip('/')}/{path.lstrip('/')}"


def _form_value(value: Any) -> str | bytes:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (str, bytes)):
        return value
    return str(value)


def form_fields(fields: Mapping[str, Any] | None) -> dict[str, str | bytes]:
    """Render multipart form fields as plain strings, dropping None values."""
    if not fields:
        return {}
    return {key: _form_value(value) for key, value in fields.items() if value is not None}


class HttpClient:
    """HTTP client for the EFIHUB API."""

    def __init__(
        self,
        config: EfihubConfig,
        *,
        cache: CacheBackend | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Args:
            config: Client configuration.
            cache: Backend holding the access token. Defaults to an
                in-process MemoryCache.
            transport: Optional transport for testing (mock transport).
        """
        self._config = config
        self._transport = transport
        self._tokens = TokenCache(
            cache if cache is not None else MemoryCache(),
            key=config.token_cache_key,
            ttl=config.token_ttl,
        )
        self._client: httpx.Client | None = None

    def __enter__(self) -> Self:
        self._ensure_client()
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    @property
    def config(self) -> EfihubConfig:
        return self._config

    @property
    def token_cache(self) -> TokenCache:
        return self._tokens

    def _ensure_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                timeout=self._config.timeout,
                transport=self._transport,
                headers={
                    "Accept": "application/json",
                    "User-Agent": self._config.user_agent,
                },
            )
        return self._client

    def close(self) -> None:
        """Close the underlying connection pool."""
        if self._client is None:
            logger.debug("Client not open.")
            return
        self._client.close()
        self._client = None

    def get_access_token(self) -> str:
        """
        Return a bearer token, fetching one if none is cached.

        Raises:
            AuthenticationError: If the token endpoint rejects the request.
            MalformedTokenResponseError: If the token response is unusable.
        """
        return self._tokens.get_token(
            lambda: fetch_access_token(self._ensure_client(), self._config)
        )

    def invalidate_token(self) -> None:
        """Forget the cached token."""
        self._tokens.invalidate()

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """
        Make an authenticated API request.

        Args:
            method: HTTP method (GET, POST, etc.).
            endpoint: API path (e.g., "/storage/url"), joined onto ``api_url``.
            params: Query parameters.
            json: JSON body.

        Returns:
            The response as received; non-2xx statuses are not raised.

        Raises:
            AuthenticationError: If no token can be obtained.
            NetworkError: If the request fails due to network issues.
        """
        method = method.upper()
        url = join_url(self._config.api_url, endpoint)

        def send(client: httpx.Client, headers: dict[str, str]) -> httpx.Response:
            return client.request(method, url, params=params, json=json, headers=headers)

        body = sanitize_for_log(json) if isinstance(json, Mapping) else None
        logger.debug("API request", method=method, endpoint=endpoint, body=body)
        return self._send_with_retry(send, method=method, endpoint=endpoint)

    def get(self, endpoint: str, params: Mapping[str, Any] | None = None) -> httpx.Response:
        """GET with ``params`` as the query string."""
        return self.request("GET", endpoint, params=params)

    def post(self, endpoint: str, json: Any = None) -> httpx.Response:
        """POST with a JSON body."""
        return self.request("POST", endpoint, json=json)

    def put(self, endpoint: str, json: Any = None) -> httpx.Response:
        """PUT with a JSON body."""
        return self.request("PUT", endpoint, json=json)

    def delete(self, endpoint: str, json: Any = None) -> httpx.Response:
        """DELETE with a JSON body."""
        return self.request("DELETE", endpoint, json=json)

    def post_multipart(
        self,
        endpoint: str,
        fields: Mapping[str, Any] | None = None,
        files: Mapping[str, FileSpec] | None = None,
    ) -> httpx.Response:
        """
        POST a multipart/form-data body.

        File specifications are resolved again for every attempt, so a retry
        after 401 re-opens files instead of replaying an exhausted stream.
        Files opened for an attempt are closed when it ends.

        Args:
            endpoint: API path.
            fields: Plain form fields. None values are skipped.
            files: Field name to file specification.

        Returns:
            The response as received.

        Raises:
            FileNotReadableError: If an upload path cannot be opened.
            InvalidFileSpecificationError: If a file spec has an unknown shape.
            AuthenticationError: If no token can be obtained.
            NetworkError: If the request fails due to network issues.
        """
        url = join_url(self._config.api_url, endpoint)
        data = form_fields(fields)
        files = files or {}

        def send(client: httpx.Client, headers: dict[str, str]) -> httpx.Response:
            with ExitStack() as stack:
                parts = resolve_files(files, stack)
                return client.post(
                    url,
                    data=data,
                    files=[
                        (part.field_name, (part.filename, part.content, None, part.headers))
                        for part in parts
                    ],
                    headers=headers,
                )

        logger.debug(
            "API multipart request",
            endpoint=endpoint,
            fields=sanitize_for_log(data),
            file_fields=list(files),
        )
        return self._send_with_retry(send, method="POST", endpoint=endpoint)

    def _send_with_retry(self, send: _Send, *, method: str, endpoint: str) -> httpx.Response:
        response = self._send(send, method=method, endpoint=endpoint)

        if response.status_code == httpx.codes.UNAUTHORIZED:
            logger.debug("Token rejected, refreshing and retrying once", endpoint=endpoint)
            self._tokens.invalidate()
            response = self._send(send, method=method, endpoint=endpoint)

        logger.debug("API response", endpoint=endpoint, status=response.status_code)
        return response

    def _send(self, send: _Send, *, method: str, endpoint: str) -> httpx.Response:
        client = self._ensure_client()
        token = self.get_access_token()
        try:
            return send(client, {"Authorization": f"Bearer {token}"})
        except httpx.TransportError as e:
            msg = f"{method} request to EFIHUB failed: {e}"
            raise NetworkError(msg, endpoint=endpoint) from e
