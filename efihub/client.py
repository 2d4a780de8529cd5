"""
EFIHUB client facade.

This is the main entry point for users of the library. It owns the HTTP
client and token cache and hands them to the per-domain services.
"""

from collections.abc import Mapping
from typing import Any, Self

import httpx
import structlog

from efihub.api.http_client import HttpClient
from efihub.config import EfihubConfig
from efihub.core.cache import CacheBackend
from efihub.models.upload import FileSpec
from efihub.services.sso import SSOService
from efihub.services.storage import StorageService
from efihub.services.websocket import WebsocketService
from efihub.services.whatsapp import WhatsappService

logger = structlog.get_logger(__name__)


class EfihubClient:
    """
    Client for the EFIHUB API.

    Example:
        ```python
        with EfihubClient() as efihub:
            url = efihub.storage.upload("invoice.pdf", "docs/")
            efihub.websocket.dispatch("orders:updates", "OrderUpdated", {"id": 7})
            efihub.whatsapp.send_message("6281200000000", "6281300000000", "Hi")

            # Any other endpoint
            response = efihub.get("/some/endpoint", {"page": 1})
        ```

    Args:
        config: Client configuration. Read from ``EFIHUB_*`` environment
            variables if not provided.
        cache: Token cache backend. Share one between clients to share the
            token.
        transport: Optional httpx transport for testing (mock transport).
    """

    def __init__(
        self,
        config: EfihubConfig | None = None,
        *,
        cache: CacheBackend | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config or EfihubConfig.from_env()
        self._http = HttpClient(self._config, cache=cache, transport=transport)

        self._sso: SSOService | None = None
        self._storage: StorageService | None = None
        self._websocket: WebsocketService | None = None
        self._whatsapp: WhatsappService | None = None

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the client and release resources."""
        self._http.close()
        logger.debug("Client closed")

    @property
    def config(self) -> EfihubConfig:
        return self._config

    @property
    def http(self) -> HttpClient:
        return self._http

    @property
    def sso(self) -> SSOService:
        if self._sso is None:
            self._sso = SSOService(self._http)
        return self._sso

    @property
    def storage(self) -> StorageService:
        if self._storage is None:
            self._storage = StorageService(self._http)
        return self._storage

    @property
    def websocket(self) -> WebsocketService:
        if self._websocket is None:
            self._websocket = WebsocketService(self._http)
        return self._websocket

    @property
    def whatsapp(self) -> WhatsappService:
        if self._whatsapp is None:
            self._whatsapp = WhatsappService(self._http)
        return self._whatsapp

    def get_access_token(self) -> str:
        """Return the cached access token, fetching one if needed."""
        return self._http.get_access_token()

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """Make an authenticated request to any EFIHUB endpoint."""
        return self._http.request(method, endpoint, params=params, json=json)

    def get(self, endpoint: str, params: Mapping[str, Any] | None = None) -> httpx.Response:
        return self._http.get(endpoint, params)

    def post(self, endpoint: str, json: Any = None) -> httpx.Response:
        return self._http.post(endpoint, json)

    def put(self, endpoint: str, json: Any = None) -> httpx.Response:
        return self._http.put(endpoint, json)

    def delete(self, endpoint: str, json: Any = None) -> httpx.Response:
        return self._http.delete(endpoint, json)

    def post_multipart(
        self,
        endpoint: str,
        fields: Mapping[str, Any] | None = None,
        files: Mapping[str, FileSpec] | None = None,
    ) -> httpx.Response:
        """POST form fields and files as multipart/form-data."""
        return self._http.post_multipart(endpoint, fields, files)
