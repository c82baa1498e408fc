# tests/test_redis_substrate.py
"""Tests for repository.redis_substrate against an in-process fake Redis."""

from unittest.mock import AsyncMock

import fakeredis
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from repository.redis_substrate import RedisSubstrate
from repository.substrate import SubstrateKey
from util.errors import SubstrateError


def _k(path: str, scope: str = "alice") -> SubstrateKey:
    return SubstrateKey("fs", scope, path)


@pytest.fixture
async def redis_client():
    client = fakeredis.FakeAsyncRedis()
    yield client
    await client.aclose()


@pytest.fixture
def store(redis_client) -> RedisSubstrate:
    return RedisSubstrate(redis_client)


async def test_roundtrip_and_delete(store):
    await store.put(_k("/a.txt"), b"hello")
    assert await store.get(_k("/a.txt")) == b"hello"
    await store.delete(_k("/a.txt"))
    assert await store.get(_k("/a.txt")) is None
    # deleting again is fine
    await store.delete(_k("/a.txt"))


async def test_layout_uses_value_key_and_index(store, redis_client):
    await store.put(_k("/d/x"), b"v")
    assert await redis_client.get("kvfs:fs:alice:/d/x") == b"v"
    assert await redis_client.zrange("kvfs:fs:index:alice", 0, -1) == [b"/d/x"]


async def test_scope_is_quoted(store, redis_client):
    await store.put(_k("/f", scope="a:b"), b"v")
    assert await redis_client.get("kvfs:fs:a%3Ab:/f") == b"v"


async def test_list_prefix_ordered(store):
    for p in ["/d/z", "/d/", "/dd", "/d/a/", "/d/a/x", "/c", "/d/é"]:
        await store.put(_k(p), p.encode("utf-8"))
    got = await store.list(_k("/d/"))
    assert [k.path for k, _ in got] == ["/d/", "/d/a/", "/d/a/x", "/d/z", "/d/é"]
    assert got[-1][1] == "/d/é".encode("utf-8")


async def test_list_isolates_scopes(store):
    await store.put(_k("/a", scope="one"), b"1")
    await store.put(_k("/a", scope="two"), b"2")
    got = await store.list(_k("/", scope="one"))
    assert got == [(_k("/a", scope="one"), b"1")]


async def test_list_skips_index_members_without_value(store, redis_client):
    await store.put(_k("/a"), b"1")
    await store.put(_k("/b"), b"2")
    await redis_client.delete("kvfs:fs:alice:/a")
    got = await store.list(_k("/"))
    assert [k.path for k, _ in got] == ["/b"]


async def test_list_empty(store):
    assert await store.list(_k("/nothing/")) == []


async def test_driver_errors_become_substrate_errors():
    client = AsyncMock()
    client.get.side_effect = RedisConnectionError("boom")
    store = RedisSubstrate(client)
    with pytest.raises(SubstrateError) as info:
        await store.get(_k("/a"))
    assert info.value.operation == "get"
    assert info.value.path == "/a"
    # logical path only, never the physical key
    assert "kvfs:" not in str(info.value)
