# ============================================================================
# SCOPE: CLIENT
# Description: Solicitudes de consulta de pacientes para el doctor autenticado.
# ============================================================================
"""Patient consultation request endpoints."""

import logging
from typing import Any

from pydantic import ValidationError

from doctor_connect.models.patient_request import PatientRequest

from .http_client import DoctorApiHttpClient

logger = logging.getLogger(__name__)

PATIENT_REQUESTS_PATH = "doctor/patient-requests"


class PatientRequestAPI:
    """List, accept and reject patient requests."""

    def __init__(self, http_client: DoctorApiHttpClient):
        self._http = http_client

    async def get_patient_requests(self) -> list[PatientRequest]:
        """Requests in the response's ``data`` list; empty when the list is absent."""
        body = await self._http.get(PATIENT_REQUESTS_PATH)
        items = body.get("data") if isinstance(body, dict) else None
        if not isinstance(items, list):
            return []

        requests: list[PatientRequest] = []
        for item in items:
            try:
                requests.append(PatientRequest.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping malformed patient request: {e}")
        return requests

    async def accept_request(self, request_id: str) -> dict[str, Any]:
        return await self._update(request_id, "accept")

    async def reject_request(self, request_id: str) -> dict[str, Any]:
        return await self._update(request_id, "reject")

    async def _update(self, request_id: str, action: str) -> dict[str, Any]:
        result = await self._http.post(f"{PATIENT_REQUESTS_PATH}/{request_id}/{action}")
        logger.info(f"Patient request {request_id}: {action}")
        return result if isinstance(result, dict) else {"data": result}
