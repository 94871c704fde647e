# ============================================================================
# SCOPE: CLIENT
# Description: Exports del módulo de integración con la API de doctores.
# ============================================================================
"""
Doctor API Integration Module.

Usage:
    from doctor_connect.client import create_doctor_api

    async with create_doctor_api() as api:
        await api.auth.login({"email": email, "password": password})
        requests = await api.patient_requests.get_patient_requests()
"""

from .auth_api import AuthAPI
from .error_handler import (
    ApiFailure,
    classify_error,
    format_validation_errors,
    get_error_message,
    get_exception_message,
    get_status_message,
    is_auth_error,
    is_client_error,
    is_network_error,
    is_server_error,
    is_timeout_error,
)
from .exceptions import (
    ApiErrorKind,
    DoctorApiAuthError,
    DoctorApiClientError,
    DoctorApiConnectionError,
    DoctorApiError,
    DoctorApiServerError,
    DoctorApiValidationError,
)
from .http_client import DoctorApiHttpClient
from .patient_request_api import PatientRequestAPI

__all__ = [
    # Clients
    "DoctorApiHttpClient",
    "AuthAPI",
    "PatientRequestAPI",
    # Errors
    "ApiErrorKind",
    "DoctorApiError",
    "DoctorApiValidationError",
    "DoctorApiAuthError",
    "DoctorApiConnectionError",
    "DoctorApiServerError",
    "DoctorApiClientError",
    # Error handling helpers
    "ApiFailure",
    "classify_error",
    "format_validation_errors",
    "get_error_message",
    "get_exception_message",
    "get_status_message",
    "is_auth_error",
    "is_client_error",
    "is_network_error",
    "is_server_error",
    "is_timeout_error",
]
