# repository/redis_substrate.py
import logging
from typing import List, Optional
from urllib.parse import quote
from redis.asyncio import Redis
from redis.exceptions import RedisError
from config.cache import get_redis
from repository.namespaces import INDEX, ROOT
from repository.substrate import Substrate, SubstrateItem, SubstrateKey
from util.errors import SubstrateError

logger = logging.getLogger(__name__)

# Upper bound for ZRANGEBYLEX prefix scans; 0xFF never occurs in UTF-8.
_LEX_MAX: bytes = b"\xff"


class RedisSubstrate(Substrate):
    """
    Flow:
    - Each entry lives in a plain Redis string at <root>:<tag>:<scope>:<path>.
    - A sorted set <root>:<tag>:index:<scope> holds every path with score 0,
      so ZRANGEBYLEX yields the lexicographic prefix scans the core relies on.
    - put/delete touch the value and the index in one MULTI block; that keeps
      a single entry consistent, never a group of entries.
    """

    def __init__(self, client: Optional[Redis] = None) -> None:
        self._redis = client

    async def _client(self) -> Redis:
        if self._redis is None:
            try:
                self._redis = await get_redis()
            except RedisError as e:
                logger.error("substrate.connect.error err=%s", type(e).__name__)
                raise SubstrateError("connect", "/", e) from e
        return self._redis

    @staticmethod
    def _scope(key: SubstrateKey) -> str:
        # Quoted so a ':' inside the scope cannot bleed into the path part.
        return quote(key.scope, safe="")

    @classmethod
    def _key(cls, key: SubstrateKey) -> str:
        return f"{ROOT}:{key.tag}:{cls._scope(key)}:{key.path}"

    @classmethod
    def _index(cls, key: SubstrateKey) -> str:
        return f"{ROOT}:{key.tag}:{INDEX}:{cls._scope(key)}"

    async def get(self, key: SubstrateKey) -> Optional[bytes]:
        r = await self._client()
        try:
            return await r.get(self._key(key))
        except RedisError as e:
            logger.error("substrate.get.error path=%s err=%s", key.path, type(e).__name__)
            raise SubstrateError("get", key.path, e) from e

    async def put(self, key: SubstrateKey, value: bytes) -> None:
        r = await self._client()
        try:
            async with r.pipeline(transaction=True) as pipe:
                pipe.set(self._key(key), value)
                pipe.zadd(self._index(key), {key.path.encode("utf-8"): 0})
                await pipe.execute()
        except RedisError as e:
            logger.error("substrate.put.error path=%s err=%s", key.path, type(e).__name__)
            raise SubstrateError("put", key.path, e) from e

    async def delete(self, key: SubstrateKey) -> None:
        r = await self._client()
        try:
            async with r.pipeline(transaction=True) as pipe:
                pipe.delete(self._key(key))
                pipe.zrem(self._index(key), key.path.encode("utf-8"))
                await pipe.execute()
        except RedisError as e:
            logger.error(
                "substrate.delete.error path=%s err=%s", key.path, type(e).__name__
            )
            raise SubstrateError("delete", key.path, e) from e

    async def list(self, prefix: SubstrateKey) -> List[SubstrateItem]:
        r = await self._client()
        low = prefix.path.encode("utf-8")
        try:
            members = await r.zrangebylex(
                self._index(prefix), b"[" + low, b"[" + low + _LEX_MAX
            )
            if not members:
                return []
            keys = [prefix.with_path(m.decode("utf-8")) for m in members]
            values = await r.mget([self._key(k) for k in keys])
        except RedisError as e:
            logger.error(
                "substrate.list.error path=%s err=%s", prefix.path, type(e).__name__
            )
            raise SubstrateError("list", prefix.path, e) from e

        out: List[SubstrateItem] = []
        for k, v in zip(keys, values):
            # Index member whose value vanished between the two reads.
            if v is None:
                continue
            out.append((k, v))
        return out
