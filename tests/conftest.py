"""Shared fixtures: an in-process Redis and the objects built on it."""

import itertools

import fakeredis
import pytest
from httpx import ASGITransport, AsyncClient

from blog.dependencies import get_store
from blog.main import app
from blog.services.posts import PostRepository
from blog.stores.redis import StoreClient


@pytest.fixture
async def redis_client():
    client = fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer())
    yield client
    await client.aclose()


@pytest.fixture
def store(redis_client) -> StoreClient:
    return StoreClient(redis_client)


@pytest.fixture
def base_ns() -> int:
    """2023-11-14T22:13:20Z in nanoseconds."""
    return 1_700_000_000_000_000_000


@pytest.fixture
def clock(base_ns: int):
    """Strictly increasing nanosecond clock, 1ms per tick."""
    ticks = itertools.count(base_ns, 1_000_000)
    return lambda: next(ticks)


@pytest.fixture
def repo(store: StoreClient, clock) -> PostRepository:
    return PostRepository(store, clock=clock)


@pytest.fixture
async def client(store: StoreClient):
    """Create test client bound to the in-process store."""
    app.dependency_overrides[get_store] = lambda: store
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
