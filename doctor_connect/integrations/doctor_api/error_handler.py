# ============================================================================
# SCOPE: CLIENT
# Description: Clasificación de errores de la API y mensajes para el usuario.
# ============================================================================
"""
Error handling utilities for Doctor API responses.

Turns a failed call (status error, timeout, connection failure) into an
ApiFailure, classifies it, and derives the message shown to the doctor.

Message priority:
1. Server-provided ``message`` field
2. Server-provided ``error`` field
3. Static message for the HTTP status code
4. Timeout message
5. Network message (request sent, no response)
6. The failure's own message, then a generic fallback
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from .exceptions import (
    ApiErrorKind,
    DoctorApiAuthError,
    DoctorApiClientError,
    DoctorApiConnectionError,
    DoctorApiError,
    DoctorApiServerError,
    DoctorApiValidationError,
)

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "An error occurred. Please try again."
NETWORK_ERROR_MESSAGE = "Network error. Please check your connection and try again."
TIMEOUT_ERROR_MESSAGE = "Request timeout. Please try again."
VALIDATION_FALLBACK_MESSAGE = "Validation error occurred."

STATUS_MESSAGES: dict[int, str] = {
    400: "Bad request. Please check your input.",
    401: "Unauthorized. Please check your credentials.",
    403: "Access forbidden. You don't have permission.",
    404: "Resource not found.",
    409: "Conflict. Resource already exists.",
    422: "Validation error. Please check your data.",
    429: "Too many requests. Please try again later.",
    500: "Internal server error. Please try again later.",
    502: "Bad gateway. Server is temporarily unavailable.",
    503: "Service unavailable. Please try again later.",
    504: "Gateway timeout. Please try again.",
}


@dataclass
class ApiFailure:
    """
    Description of a failed request.

    status_code is set only when the server responded. request_sent without
    a status code means the request left but no response came back.
    """

    status_code: int | None = None
    data: Any = None
    request_sent: bool = False
    timed_out: bool = False
    message: str | None = None

    @property
    def has_response(self) -> bool:
        return self.status_code is not None

    @classmethod
    def from_response(cls, response: httpx.Response) -> ApiFailure:
        return cls(
            status_code=response.status_code,
            data=_decode_body(response),
            request_sent=True,
        )

    @classmethod
    def from_exception(cls, exc: BaseException) -> ApiFailure:
        if isinstance(exc, httpx.HTTPStatusError):
            return cls.from_response(exc.response)
        if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError)):
            return cls(request_sent=True, timed_out=True, message=str(exc) or None)
        if isinstance(exc, httpx.RequestError):
            return cls(request_sent=True, message=str(exc) or None)
        return cls(message=str(exc) or None)


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def get_status_message(status: int) -> str:
    """Static user-facing message for an HTTP status code."""
    return STATUS_MESSAGES.get(status, f"Server error ({status})")


def format_validation_errors(errors: Any) -> str:
    """Flatten a validation error payload (string, list or mapping) to one line."""
    if isinstance(errors, str):
        return errors
    if isinstance(errors, (list, tuple)):
        return ", ".join(str(e) for e in errors)
    if isinstance(errors, Mapping):
        return ", ".join(str(v) for v in errors.values() if v)
    return VALIDATION_FALLBACK_MESSAGE


def _server_message(data: Any) -> str | None:
    if not isinstance(data, Mapping):
        return None
    message = data.get("message")
    if message:
        return message if isinstance(message, str) else format_validation_errors(message)
    server_error = data.get("error")
    if server_error:
        return server_error if isinstance(server_error, str) else format_validation_errors(server_error)
    return None


def get_error_message(failure: ApiFailure) -> str:
    """User-facing message for a failed call."""
    if failure.has_response:
        return _server_message(failure.data) or get_status_message(failure.status_code)
    if failure.timed_out:
        return TIMEOUT_ERROR_MESSAGE
    if failure.request_sent:
        return NETWORK_ERROR_MESSAGE
    if failure.message:
        return failure.message
    return DEFAULT_ERROR_MESSAGE


def is_network_error(failure: ApiFailure) -> bool:
    return not failure.has_response and failure.request_sent


def is_timeout_error(failure: ApiFailure) -> bool:
    return not failure.has_response and failure.timed_out


def is_auth_error(failure: ApiFailure) -> bool:
    return failure.status_code in (401, 403)


def is_server_error(failure: ApiFailure) -> bool:
    return failure.status_code is not None and failure.status_code >= 500


def is_client_error(failure: ApiFailure) -> bool:
    return failure.status_code is not None and 400 <= failure.status_code < 500


def classify_error(failure: ApiFailure) -> ApiErrorKind:
    if failure.has_response:
        if failure.status_code == 422:
            return ApiErrorKind.VALIDATION
        if is_auth_error(failure):
            return ApiErrorKind.AUTH
        if is_server_error(failure):
            return ApiErrorKind.SERVER
        if is_client_error(failure):
            return ApiErrorKind.CLIENT
        return ApiErrorKind.UNKNOWN
    if is_timeout_error(failure):
        return ApiErrorKind.TIMEOUT
    if is_network_error(failure):
        return ApiErrorKind.NETWORK
    return ApiErrorKind.UNKNOWN


def error_from_failure(failure: ApiFailure) -> DoctorApiError:
    """Build the DoctorApiError subclass matching the failure's classification."""
    kind = classify_error(failure)
    message = get_error_message(failure)

    if kind == ApiErrorKind.VALIDATION:
        return DoctorApiValidationError(message, failure.status_code, failure.data)
    if kind == ApiErrorKind.AUTH:
        error_cls: type[DoctorApiError] = DoctorApiAuthError
    elif kind in (ApiErrorKind.NETWORK, ApiErrorKind.TIMEOUT):
        error_cls = DoctorApiConnectionError
    elif kind == ApiErrorKind.SERVER:
        error_cls = DoctorApiServerError
    elif kind == ApiErrorKind.CLIENT:
        error_cls = DoctorApiClientError
    else:
        error_cls = DoctorApiError
    return error_cls(message, kind, failure.status_code, failure.data)


def get_exception_message(exc: BaseException) -> str:
    """User-facing message for any exception raised by a Doctor API call."""
    if isinstance(exc, DoctorApiError):
        return exc.message
    return get_error_message(ApiFailure.from_exception(exc))
