"""Redis store client.

Handles:
- Connection pooling (one pool per process, connections acquired per command)
- Primitive key/hash/sorted-set operations
- Best-effort MULTI/EXEC batches

Key layout:
- id:post          counter, last assigned post id
- post             hash, id -> encoded post
- post:created_at  sorted set, member id scored by creation nanoseconds
- link             hash, link -> id

No indexing logic in the store - that belongs in services.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import logging

import redis.asyncio as redis
from redis.exceptions import RedisError

from blog.errors import StorageError, TransactionError

# Key names
KEY_POST_ID = "id:post"
KEY_POSTS = "post"
KEY_POSTS_BY_CREATED_AT = "post:created_at"
KEY_LINKS = "link"

logger = logging.getLogger("uvicorn.error")

Value = bytes | str | int | float


# ============================================================
# Transaction commands
# ============================================================


@dataclass(frozen=True)
class HashSet:
    """HSET name field value."""

    name: str
    field: Value
    value: Value

    def queue(self, pipe: redis.client.Pipeline) -> None:
        pipe.hset(self.name, self.field, self.value)


@dataclass(frozen=True)
class SortedSetAdd:
    """ZADD name score member."""

    name: str
    score: float
    member: Value

    def queue(self, pipe: redis.client.Pipeline) -> None:
        pipe.zadd(self.name, {self.member: self.score})


Command = HashSet | SortedSetAdd


class StoreClient:
    """Thin async wrapper over a pooled Redis client.

    Every operation borrows a connection from the pool for the duration of
    the command and returns it on all exit paths. Backend failures surface
    as StorageError; nothing is retried.
    """

    def __init__(self, client: redis.Redis) -> None:
        self._redis = client

    @classmethod
    def from_url(
        cls,
        url: str,
        *,
        max_connections: int | None = None,
        socket_timeout: float | None = None,
        socket_connect_timeout: float | None = None,
    ) -> StoreClient:
        """Build a client with its own connection pool.

        Args:
            url: Redis URL (redis:// or rediss://).
            max_connections: Pool cap, unbounded when None.
            socket_timeout: Per-command timeout, redis-py default when None.
            socket_connect_timeout: Connect timeout, redis-py default when None.
        """
        pool = redis.ConnectionPool.from_url(
            url,
            max_connections=max_connections,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_connect_timeout,
        )
        return cls(redis.Redis(connection_pool=pool))

    async def ping(self) -> bool:
        try:
            return bool(await self._redis.ping())
        except RedisError as e:
            raise StorageError(f"ping failed: {e}") from e

    async def close(self) -> None:
        await self._redis.aclose()

    # ============================================================
    # Reads
    # ============================================================

    async def get(self, key: str) -> bytes | None:
        try:
            return await self._redis.get(key)
        except RedisError as e:
            raise StorageError(f"GET {key} failed: {e}") from e

    async def hash_get(self, name: str, field: Value) -> bytes | None:
        try:
            return await self._redis.hget(name, field)
        except RedisError as e:
            raise StorageError(f"HGET {name} {field} failed: {e}") from e

    async def hash_get_many(self, name: str, fields: Sequence[Value]) -> list[bytes | None]:
        """Fetch many hash fields in one pipelined round trip.

        The result is aligned with `fields`; absent fields are None.
        """
        if not fields:
            return []
        try:
            async with self._redis.pipeline(transaction=False) as pipe:
                for field in fields:
                    pipe.hget(name, field)
                return list(await pipe.execute())
        except RedisError as e:
            raise StorageError(f"pipelined HGET {name} failed: {e}") from e

    async def sorted_set_range_desc(self, name: str, start: int = 0, stop: int = -1) -> list[bytes]:
        """Members from highest to lowest score (ZREVRANGE)."""
        try:
            return list(await self._redis.zrevrange(name, start, stop))
        except RedisError as e:
            raise StorageError(f"ZREVRANGE {name} failed: {e}") from e

    # ============================================================
    # Writes
    # ============================================================

    async def hash_set(self, name: str, field: Value, value: Value) -> None:
        try:
            await self._redis.hset(name, field, value)
        except RedisError as e:
            raise StorageError(f"HSET {name} {field} failed: {e}") from e

    async def increment(self, key: str) -> int:
        """Atomically increment a counter and return the new value."""
        try:
            return int(await self._redis.incr(key))
        except RedisError as e:
            raise StorageError(f"INCR {key} failed: {e}") from e

    async def sorted_set_add(self, name: str, score: float, member: Value) -> None:
        try:
            await self._redis.zadd(name, {member: score})
        except RedisError as e:
            raise StorageError(f"ZADD {name} failed: {e}") from e

    async def transaction(self, *commands: Command) -> None:
        """Run write commands as one MULTI/EXEC batch.

        Redis applies the batch as a unit with respect to other clients but
        does not roll back commands that fail inside EXEC.

        Raises:
            TransactionError: If queuing or EXEC fails.
        """
        if not commands:
            return
        try:
            async with self._redis.pipeline(transaction=True) as pipe:
                for command in commands:
                    command.queue(pipe)
                await pipe.execute()
        except RedisError as e:
            logger.exception(f"Transaction of {len(commands)} commands failed")
            raise TransactionError(f"transaction failed: {e}") from e
