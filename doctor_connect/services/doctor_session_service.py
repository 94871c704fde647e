"""
Doctor Session Service

Restores the signed-in doctor's profile at startup and refreshes it on
demand, keeping the cached record in the session store in sync.
"""

import logging
from typing import Any

from doctor_connect.integrations.doctor_api.auth_api import AuthAPI
from doctor_connect.integrations.doctor_api.exceptions import DoctorApiError
from doctor_connect.models.doctor import DoctorProfile
from doctor_connect.services.session_store import SessionStore

logger = logging.getLogger(__name__)


class DoctorSessionService:
    """
    Profile lookup backed by the session store, with JWT verification as fallback.

    - No token stored: not signed in, returns None
    - Cached user data: returned without a network call
    - Otherwise: verify the token, cache and return the doctor
    - 401 while verifying: session cleared, returns None
    """

    def __init__(self, auth_api: AuthAPI, session_store: SessionStore):
        self._auth = auth_api
        self._session = session_store

    async def load_doctor_profile(self) -> DoctorProfile | None:
        token = await self._session.get_token()
        if not token:
            logger.info("No token found, sign-in required")
            return None

        user_data = await self._session.get_user_data()
        if user_data:
            logger.debug("Doctor info loaded from storage")
            return DoctorProfile.model_validate(user_data)

        return await self._verify_and_cache(token)

    async def refresh_profile(self) -> DoctorProfile | None:
        """Re-verify the stored token and replace the cached doctor record."""
        token = await self._session.get_token()
        if not token:
            return None
        return await self._verify_and_cache(token)

    async def _verify_and_cache(self, token: str) -> DoctorProfile | None:
        try:
            verification = await self._auth.verify_jwt(token)
        except DoctorApiError as e:
            if e.status_code == 401:
                logger.warning("Token is invalid or expired, clearing session")
                await self._session.clear_all()
                return None
            raise

        if not verification.is_verified:
            logger.warning(f"JWT verification not confirmed: {verification.message}")
            return None

        doctor: dict[str, Any] = verification.doctor or {}
        await self._session.set_user_data(doctor)
        logger.info("Doctor info fetched from API")
        return DoctorProfile.model_validate(doctor)
