import asyncio

import aiohttp
import pytest
import pytest_asyncio
from aiohttp.test_utils import TestClient, TestServer
from aioresponses import aioresponses

from api_connector.api.app import app_factory
from api_connector.core.kv import MemoryKeyValueStore

UPSTREAM = "http://api.example.com"
THINGS_URL = f"{UPSTREAM}/things"
OTHER_URL = f"{UPSTREAM}/other"


@pytest.fixture
def rmock():
    # passthrough for local requests (aiohttp TestServer)
    with aioresponses(passthrough=["http://127.0.0.1"]) as m:
        yield m


@pytest.fixture
def kv():
    return MemoryKeyValueStore()


@pytest_asyncio.fixture
async def client():
    async with aiohttp.ClientSession() as session:
        yield session


@pytest_asyncio.fixture
async def fake_client(kv):
    app = await app_factory(kv=kv)
    async with TestClient(TestServer(app)) as client:
        yield client


async def wait_until(predicate, timeout: float = 2.0):
    """Polls `predicate` (sync or async) until it is truthy."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while True:
        value = predicate()
        if asyncio.iscoroutine(value):
            value = await value
        if value:
            return value
        if loop.time() > deadline:
            raise AssertionError("condition not met in time")
        await asyncio.sleep(0.005)


async def fetch_view(fake_client, resource_id: str) -> dict:
    res = await fake_client.get(f"/api/resources/{resource_id}/")
    assert res.status == 200
    return await res.json()
