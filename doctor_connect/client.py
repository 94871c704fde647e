"""
Doctor API wiring.

Builds the session store, the HTTP client and the endpoint groups, and
registers SessionStore.clear_all as the client's unauthorized callback.
"""

import logging
from dataclasses import dataclass

import httpx

from doctor_connect.config.settings import Settings, get_settings
from doctor_connect.integrations.doctor_api.auth_api import AuthAPI
from doctor_connect.integrations.doctor_api.http_client import DoctorApiHttpClient
from doctor_connect.integrations.doctor_api.patient_request_api import PatientRequestAPI
from doctor_connect.repositories import create_key_value_store
from doctor_connect.services.doctor_session_service import DoctorSessionService
from doctor_connect.services.session_store import SessionStore

logger = logging.getLogger(__name__)


@dataclass
class DoctorApi:
    """Everything a caller needs, sharing one session store and one HTTP client."""

    http: DoctorApiHttpClient
    session: SessionStore
    auth: AuthAPI
    patient_requests: PatientRequestAPI
    profile: DoctorSessionService

    async def close(self) -> None:
        await self.http.close()
        await self.session.close()

    async def __aenter__(self) -> "DoctorApi":
        await self.http.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def create_doctor_api(
    settings: Settings | None = None,
    session_store: SessionStore | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> DoctorApi:
    """
    Assemble a DoctorApi.

    Args:
        settings: Client settings (defaults to get_settings())
        session_store: Existing session store; built from settings when omitted
        transport: Optional httpx transport for the HTTP client
    """
    settings = settings or get_settings()
    session_store = session_store or SessionStore(create_key_value_store(settings))

    http_client = DoctorApiHttpClient(
        base_url=settings.API_BASE_URL,
        token_provider=session_store.get_token,
        on_unauthorized=session_store.clear_all,
        timeout=settings.API_TIMEOUT_SECONDS,
        transport=transport,
    )
    auth_api = AuthAPI(http_client, session_store)

    logger.debug(f"Doctor API configured for {settings.API_BASE_URL}")
    return DoctorApi(
        http=http_client,
        session=session_store,
        auth=auth_api,
        patient_requests=PatientRequestAPI(http_client),
        profile=DoctorSessionService(auth_api, session_store),
    )
