from collections.abc import Iterator
from pathlib import Path
from unittest.mock import Mock

import pytest

from efihub.api.http_client import HttpClient
from efihub.config import EfihubConfig
from efihub.core.cache import MemoryCache
from efihub.tests.utils.mock_transport import API_URL, TOKEN_URL, MockTransport


@pytest.fixture
def config() -> EfihubConfig:
    """Create test config."""
    return EfihubConfig(
        client_id="test-client",
        client_secret="test-secret",
        token_url=TOKEN_URL,
        api_url=API_URL,
    )


@pytest.fixture
def mock_transport() -> MockTransport:
    return MockTransport()


@pytest.fixture
def memory_cache() -> MemoryCache:
    return MemoryCache()


@pytest.fixture
def http_client(
    config: EfihubConfig, memory_cache: MemoryCache, mock_transport: MockTransport
) -> Iterator[HttpClient]:
    client = HttpClient(config, cache=memory_cache, transport=mock_transport)
    yield client
    client.close()


@pytest.fixture
def mock_http(config: EfihubConfig) -> Mock:
    http = Mock(spec=HttpClient)
    http.config = config
    return http


@pytest.fixture
def upload_file(tmp_path: Path) -> Path:
    path = tmp_path / "x.png"
    path.write_bytes(b"\x89PNG fake image")
    return path
