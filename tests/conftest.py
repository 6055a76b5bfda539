"""
Test Configuration
==================

Shared fixtures: pinned randomness and time, a fresh cache per test, and
httpx clients backed by MockTransport.
"""

import os
import random
from collections.abc import AsyncGenerator, Callable
from datetime import datetime, timezone

import httpx
import pytest
import pytest_asyncio

# Keep test output quiet and never reach real services
os.environ["LOG_LEVEL"] = "error"
os.environ.pop("CANVA_ACCESS_TOKEN", None)
os.environ.pop("GITHUB_TOKEN", None)

from src.utils.cache import TTLCache, cache_store  # noqa: E402
from src.utils.config import reset_config  # noqa: E402

FIXED_NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Monotonic seconds clock advanced by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Fresh configuration with exports under the test's tmp_path."""
    monkeypatch.setenv("EXPORTS_DIR", str(tmp_path / "exports"))
    reset_config()
    cache_store.clear()
    yield
    reset_config()
    cache_store.clear()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(fake_clock) -> TTLCache:
    return TTLCache(clock=fake_clock)


@pytest.fixture
def exports_dir(tmp_path):
    return tmp_path / "exports"


@pytest_asyncio.fixture
async def mock_client() -> AsyncGenerator[Callable[..., httpx.AsyncClient], None]:
    """
    Factory for AsyncClients answering through a handler.

    Usage:
        client = mock_client(lambda request: httpx.Response(200, json={...}))
    """
    clients: list[httpx.AsyncClient] = []

    def build(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield build

    for client in clients:
        await client.aclose()
