"""
Async Redis Key-Value Store

Session storage backend on redis.asyncio, for embedding the client in a
server process where several workers share one doctor session.
"""

import logging
from collections.abc import Iterable

import redis.asyncio as aioredis

from doctor_connect.config.settings import Settings, get_settings

from .key_value_store import KeyValueStore

logger = logging.getLogger(__name__)


class RedisKeyValueStore(KeyValueStore):
    """
    Redis-backed key-value store.

    Keys are namespaced with a prefix. The connection is opened lazily on
    first use; connection errors propagate to the caller.

    Usage:
        store = RedisKeyValueStore(prefix="doctor_connect:session")
        await store.set_item("authToken", "abc")
        await store.close()
    """

    def __init__(
        self,
        prefix: str = "",
        settings: Settings | None = None,
        client: aioredis.Redis | None = None,
    ):
        self.settings = settings or get_settings()
        self.prefix = prefix
        self._redis_client = client

    def _get_key(self, key: str) -> str:
        """Build full key with prefix."""
        return f"{self.prefix}:{key}" if self.prefix else key

    async def _ensure_connected(self) -> aioredis.Redis:
        if self._redis_client is None:
            self._redis_client = aioredis.Redis(
                host=self.settings.REDIS_HOST,
                port=self.settings.REDIS_PORT,
                db=self.settings.REDIS_DB,
                password=self.settings.REDIS_PASSWORD,
                decode_responses=True,
                socket_timeout=5.0,
                socket_connect_timeout=5.0,
            )
            logger.info(
                f"Async Redis session store configured: "
                f"{self.settings.REDIS_HOST}:{self.settings.REDIS_PORT}"
            )
        return self._redis_client

    async def get_item(self, key: str) -> str | None:
        client = await self._ensure_connected()
        data = await client.get(self._get_key(key))
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return data

    async def set_item(self, key: str, value: str) -> None:
        client = await self._ensure_connected()
        await client.set(self._get_key(key), value)

    async def multi_remove(self, keys: Iterable[str]) -> None:
        redis_keys = [self._get_key(key) for key in keys]
        if not redis_keys:
            return
        client = await self._ensure_connected()
        deleted = await client.delete(*redis_keys)
        logger.debug(f"Async Redis: deleted {deleted} of {len(redis_keys)} session keys")

    async def close(self) -> None:
        if self._redis_client is not None:
            await self._redis_client.aclose()
            self._redis_client = None
