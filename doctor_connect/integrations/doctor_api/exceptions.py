# ============================================================================
# SCOPE: CLIENT
# Description: Excepciones para el módulo de integración con la API de doctores.
# ============================================================================
"""
Doctor API Exceptions.

Single Responsibility: Define the error taxonomy for Doctor API operations.
"""

from enum import Enum
from typing import Any


class ApiErrorKind(str, Enum):
    """Classification of a failed request."""

    VALIDATION = "validation"
    NETWORK = "network"
    TIMEOUT = "timeout"
    AUTH = "auth"
    SERVER = "server"
    CLIENT = "client"
    UNKNOWN = "unknown"


class DoctorApiError(Exception):
    """
    Base exception for Doctor API errors.

    Carries a user-facing message plus the classified kind, the HTTP status
    (when a response was received) and the decoded response body.
    """

    def __init__(
        self,
        message: str,
        kind: ApiErrorKind = ApiErrorKind.UNKNOWN,
        status_code: int | None = None,
        data: Any = None,
    ):
        self.message = message
        self.kind = kind
        self.status_code = status_code
        self.data = data
        super().__init__(message)


class DoctorApiValidationError(DoctorApiError):
    """422 from the server, or required fields missing before sending."""

    def __init__(self, message: str, status_code: int | None = None, data: Any = None):
        super().__init__(message, ApiErrorKind.VALIDATION, status_code, data)


class DoctorApiAuthError(DoctorApiError):
    """401 Unauthorized or 403 Forbidden."""

    pass


class DoctorApiConnectionError(DoctorApiError):
    """No response received: network failure or timeout."""

    pass


class DoctorApiServerError(DoctorApiError):
    """5xx server error."""

    pass


class DoctorApiClientError(DoctorApiError):
    """Any other 4xx client error."""

    pass
