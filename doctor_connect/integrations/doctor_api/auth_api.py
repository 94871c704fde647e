# ============================================================================
# SCOPE: CLIENT
# Description: Endpoints de autenticación de doctores (signup, login, JWT).
# ============================================================================
"""
Doctor authentication API.

Signup and login validate required fields before sending and, on a
200/201 response carrying a token, persist the token and doctor record in
the session store. Login without a token is an unexpected response.
JWT verification goes out without the bearer header and without the
401 logout policy.
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from doctor_connect.models.doctor import AuthResponse, JwtVerification, LoginRequest, SignupRequest
from doctor_connect.services.session_store import SessionStore

from .exceptions import ApiErrorKind, DoctorApiError, DoctorApiValidationError
from .http_client import DoctorApiHttpClient

logger = logging.getLogger(__name__)

SIGNUP_PATH = "doctor/auth/signup"
LOGIN_PATH = "doctor/auth/login"
JWT_PATH = "doctor/auth/jwt"

PERSIST_STATUS_CODES = frozenset({200, 201})


def missing_fields(data: Mapping[str, Any], required: tuple[str, ...]) -> list[str]:
    """Required fields that are absent or empty."""
    return [field for field in required if not data.get(field)]


class AuthAPI:
    """Doctor signup, login, JWT verification and logout."""

    def __init__(self, http_client: DoctorApiHttpClient, session_store: SessionStore):
        self._http = http_client
        self._session = session_store

    async def signup(self, signup_data: Mapping[str, Any]) -> AuthResponse:
        """
        Register a doctor account.

        Raises:
            DoctorApiValidationError: Required fields missing (nothing is sent)
            DoctorApiError: Request failed
        """
        missing = missing_fields(signup_data, SignupRequest.REQUIRED_FIELDS)
        if missing:
            raise DoctorApiValidationError(f"Please fill in: {', '.join(missing)}")

        payload = self._build(SignupRequest, signup_data)
        return await self._authenticate(SIGNUP_PATH, payload.model_dump(exclude_none=True))

    async def login(self, login_data: Mapping[str, Any]) -> AuthResponse:
        """
        Log a doctor in with email and password.

        Raises:
            DoctorApiValidationError: Email or password missing (nothing is sent)
            DoctorApiError: Request failed
        """
        if missing_fields(login_data, LoginRequest.REQUIRED_FIELDS):
            raise DoctorApiValidationError("Please enter both email and password")

        payload = self._build(LoginRequest, login_data)
        return await self._authenticate(LOGIN_PATH, payload.model_dump(), require_token=True)

    async def verify_jwt(self, token: str) -> JwtVerification:
        """Verify a token and fetch the doctor it belongs to."""
        data = await self._http.post(JWT_PATH, {"token": token}, authenticated=False)
        return JwtVerification.model_validate(data if isinstance(data, dict) else {})

    async def logout(self) -> bool:
        cleared = await self._session.clear_all()
        if not cleared:
            logger.error("Logout error: session could not be cleared")
        return cleared

    @staticmethod
    def _build(model: type, data: Mapping[str, Any]) -> Any:
        try:
            return model.model_validate(dict(data))
        except ValidationError as e:
            raise DoctorApiValidationError(
                "; ".join(err["msg"] for err in e.errors())
            ) from e

    async def _authenticate(
        self, path: str, payload: dict[str, Any], require_token: bool = False
    ) -> AuthResponse:
        response = await self._http.send("POST", path, json_body=payload)

        try:
            auth = AuthResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Failed to parse auth response from {path}: {e}")
            raise DoctorApiError(
                "Unexpected response from server.",
                ApiErrorKind.UNKNOWN,
                response.status_code,
            ) from e

        if require_token and not auth.token:
            logger.error(f"No token in auth response from {path}")
            raise DoctorApiError("Unexpected response from server.", ApiErrorKind.UNKNOWN, response.status_code)

        auth.persisted = False
        if response.status_code in PERSIST_STATUS_CODES and auth.token:
            auth.persisted = await self._session.save_session(auth.token, auth.doctor)
            if auth.persisted:
                logger.info(f"Session stored after {path}")
            else:
                logger.warning("Authenticated but the session could not be persisted")
        return auth
