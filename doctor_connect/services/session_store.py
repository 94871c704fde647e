"""
Session Store

Persists the doctor's auth token and cached profile record on top of a
KeyValueStore. Every operation is fallible because of storage I/O:
failures are logged and reported as False / None, never raised.

The token and the user record are coupled: clearing the token always
clears the user record, and the user record is not returned while no
token is stored.
"""

import json
import logging
from typing import Any

from doctor_connect.models.session import SESSION_KEYS, TOKEN_KEY, USER_DATA_KEY, Session
from doctor_connect.repositories.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)


class SessionStore:
    """
    Explicit session object held by the API client.

    Construct once at process start, pass it to the client wiring, and
    call clear_all() on logout.

    Usage:
        store = SessionStore(JsonFileKeyValueStore(path))
        await store.set_token("abc")
        token = await store.get_token()
    """

    def __init__(self, backend: KeyValueStore):
        self._backend = backend

    @property
    def backend(self) -> KeyValueStore:
        return self._backend

    async def get_token(self) -> str | None:
        try:
            return await self._backend.get_item(TOKEN_KEY) or None
        except Exception as e:
            logger.error(f"Error getting token: {e}")
            return None

    async def set_token(self, token: str) -> bool:
        try:
            await self._backend.set_item(TOKEN_KEY, token)
            return True
        except Exception as e:
            logger.error(f"Error setting token: {e}")
            return False

    async def get_user_data(self) -> dict[str, Any] | None:
        """Return the cached user record, or None when absent or orphaned."""
        try:
            token = await self._backend.get_item(TOKEN_KEY)
            raw = await self._backend.get_item(USER_DATA_KEY)
        except Exception as e:
            logger.error(f"Error getting user data: {e}")
            return None

        if not raw:
            return None
        if not token:
            logger.warning("Discarding cached user data stored without a token")
            return None

        try:
            user_data = json.loads(raw)
        except ValueError as e:
            logger.error(f"Error decoding user data: {e}")
            return None
        if not isinstance(user_data, dict):
            logger.error(f"Discarding cached user data that is not an object: {type(user_data).__name__}")
            return None
        return user_data

    async def set_user_data(self, user_data: dict[str, Any]) -> bool:
        try:
            await self._backend.set_item(USER_DATA_KEY, json.dumps(user_data))
            return True
        except Exception as e:
            logger.error(f"Error setting user data: {e}")
            return False

    async def clear_token(self) -> bool:
        """Remove the token. The user record goes with it."""
        return await self.clear_all()

    async def clear_all(self) -> bool:
        try:
            await self._backend.multi_remove(SESSION_KEYS)
            logger.info("Session cleared")
            return True
        except Exception as e:
            logger.error(f"Error clearing storage: {e}")
            return False

    async def has_session(self) -> bool:
        return await self.get_token() is not None

    async def snapshot(self) -> Session:
        return Session(token=await self.get_token(), user_data=await self.get_user_data())

    async def save_session(self, token: str, user_data: dict[str, Any] | None) -> bool:
        """Persist a freshly issued token together with its user record."""
        if not await self.set_token(token):
            return False
        if user_data is None:
            # A previous doctor's record must not survive a new login
            try:
                await self._backend.remove_item(USER_DATA_KEY)
            except Exception as e:
                logger.error(f"Error removing stale user data: {e}")
                return False
            return True
        return await self.set_user_data(user_data)

    async def close(self) -> None:
        await self._backend.close()
