"""
EFIHUB Python Client.

A synchronous client for the EFIHUB API: client-credentials authentication,
storage, SSO, websocket dispatch and WhatsApp messaging.

Example:
    ```python
    from efihub import EfihubClient, EfihubConfig

    config = EfihubConfig(client_id="my-id", client_secret="my-secret")

    with EfihubClient(config) as efihub:
        url = efihub.storage.upload({"path": "/tmp/report.pdf"}, "reports/")
        if efihub.storage.exists("reports/report.pdf"):
            print(efihub.storage.size("reports/report.pdf"))
    ```
"""

from efihub.client import EfihubClient
from efihub.config import EfihubConfig
from efihub.core.cache import CacheBackend, MemoryCache
from efihub.exceptions import (
    APIError,
    AuthenticationError,
    EfihubError,
    FileNotReadableError,
    FileSpecError,
    InvalidFileSpecificationError,
    MalformedTokenResponseError,
    NetworkError,
    RemoteCallError,
)
from efihub.models.sso import SSOUser
from efihub.models.upload import FileContents, FilePath

__version__ = "0.1.0"

__all__ = [
    # Main client
    "EfihubClient",
    "EfihubConfig",
    # Caching
    "CacheBackend",
    "MemoryCache",
    # Models
    "FileContents",
    "FilePath",
    "SSOUser",
    # Exceptions
    "EfihubError",
    "AuthenticationError",
    "MalformedTokenResponseError",
    "FileSpecError",
    "FileNotReadableError",
    "InvalidFileSpecificationError",
    "APIError",
    "RemoteCallError",
    "NetworkError",
]
