"""
Storage backends for the doctor session.
"""

from doctor_connect.config.settings import Settings

from .key_value_store import InMemoryKeyValueStore, JsonFileKeyValueStore, KeyValueStore
from .redis_key_value_store import RedisKeyValueStore


def create_key_value_store(settings: Settings) -> KeyValueStore:
    """Build the key-value backend selected by SESSION_STORAGE_BACKEND."""
    backend = settings.SESSION_STORAGE_BACKEND
    if backend == "redis":
        return RedisKeyValueStore(prefix=settings.REDIS_PREFIX, settings=settings)
    if backend == "memory":
        return InMemoryKeyValueStore()
    return JsonFileKeyValueStore(settings.SESSION_STORAGE_PATH)


__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "RedisKeyValueStore",
    "create_key_value_store",
]
