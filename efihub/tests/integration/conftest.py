import os
from collections.abc import Iterator

import pytest

from efihub import EfihubClient, EfihubConfig


def pytest_collection_modifyitems(config: pytest.Config, items: list) -> None:
    missing = not (os.getenv("EFIHUB_CLIENT_ID") and os.getenv("EFIHUB_CLIENT_SECRET"))
    if not missing:
        return
    mark_expr = getattr(config.option, "markexpr", "")
    if "integration" in mark_expr:
        return
    skip = pytest.mark.skip(reason="EFIHUB_CLIENT_ID / EFIHUB_CLIENT_SECRET not set")
    for item in items:
        if item.get_closest_marker("integration"):
            item.add_marker(skip)


@pytest.fixture(scope="session")
def live_config() -> EfihubConfig:
    config = EfihubConfig.from_env()
    if not config.client_id or not config.client_secret:
        pytest.fail(
            "EFIHUB_CLIENT_ID and EFIHUB_CLIENT_SECRET must be set to run integration tests."
        )
    return config


@pytest.fixture
def live_client(live_config: EfihubConfig) -> Iterator[EfihubClient]:
    with EfihubClient(live_config) as client:
        yield client
