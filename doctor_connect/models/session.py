"""Persisted doctor session."""

from typing import Any

from pydantic import BaseModel

# Storage keys shared with the mobile client
TOKEN_KEY = "authToken"
USER_DATA_KEY = "userData"
SESSION_KEYS = (TOKEN_KEY, USER_DATA_KEY)


class Session(BaseModel):
    """
    Snapshot of the stored session.

    user_data is only meaningful while token is present.
    """

    token: str | None = None
    user_data: dict[str, Any] | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)
