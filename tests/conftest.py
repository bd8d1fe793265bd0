from collections.abc import AsyncGenerator, Generator

import httpx
import pytest

from uptime_monitor.infra.adapter.local_scheduler import get_local_scheduler
from uptime_monitor.infra.config.config import get_config


@pytest.fixture(autouse=True)
def _set_required_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MONITOR_CONFIG__TARGET_URL", "https://status.example.com/health")


@pytest.fixture(autouse=True)
def _reset_cached_singletons() -> Generator[None, None, None]:
    cacheables = [
        get_config,
        get_local_scheduler,
    ]

    for cacheable in cacheables:
        cacheable.cache_clear()

    yield

    for cacheable in cacheables:
        cacheable.cache_clear()


@pytest.fixture
async def async_client_factory() -> AsyncGenerator:
    clients: list[httpx.AsyncClient] = []

    async def _factory(app, *, raise_app_exceptions: bool = True) -> httpx.AsyncClient:
        transport = httpx.ASGITransport(app=app, raise_app_exceptions=raise_app_exceptions)
        client = httpx.AsyncClient(transport=transport, base_url="http://testserver")
        clients.append(client)
        return client

    try:
        yield _factory
    finally:
        for client in clients:
            await client.aclose()
