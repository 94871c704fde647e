# ============================================================================
# SCOPE: CLIENT
# Description: Cliente HTTP para la API de doctores con token Bearer.
#              En 401 invoca el callback registrado (logout por expiración).
# ============================================================================
"""
Doctor API HTTP Client.

Single Responsibility: Execute HTTP requests against the Doctor API.

Behavior:
- Fixed base URL and one overall timeout per request (10s by default)
- Attaches ``Authorization: Bearer <token>`` when the token provider has one
- 401 on an authenticated request: invoke the registered unauthorized callback
- No retries, no request queueing or deduplication
- Non-2xx, timeouts and transport errors raise DoctorApiError subclasses
"""

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from .error_handler import ApiFailure, error_from_failure

logger = logging.getLogger(__name__)


class DoctorApiHttpClient:
    """
    HTTP client for the Doctor API.

    The client never touches session storage itself. The caller supplies
    a token provider and, optionally, a callback to run when the server
    answers 401 to an authenticated request.

    Usage:
        async with DoctorApiHttpClient(
            base_url="http://localhost:5001/",
            token_provider=session_store.get_token,
            on_unauthorized=session_store.clear_all,
        ) as client:
            data = await client.get("doctor/patient-requests")
    """

    DEFAULT_TIMEOUT = 10.0

    def __init__(
        self,
        base_url: str,
        token_provider: Callable[[], Awaitable[str | None]] | None = None,
        on_unauthorized: Callable[[], Any] | None = None,  # May return coroutine or None
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize HTTP client.

        Args:
            base_url: Base URL every request path is resolved against
            token_provider: Async callable returning the current token or None
            on_unauthorized: Callable run after a 401 response. May be sync
                             (returns None) or return a coroutine.
            timeout: Overall request timeout in seconds. httpx applies it to
                     each phase and wait_for caps the whole request.
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self._base_url = base_url
        self._get_token = token_provider
        self._on_unauthorized = on_unauthorized
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> float:
        return self._timeout

    async def initialize(self) -> None:
        """Initialize persistent HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=httpx.Timeout(self._timeout),
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            )

    async def close(self) -> None:
        """Close HTTP client and release resources."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "DoctorApiHttpClient":
        """Async context manager entry."""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure HTTP client is initialized."""
        if self._client is None:
            await self.initialize()
        return self._client  # type: ignore

    async def _get_headers(self, authenticated: bool) -> dict[str, str]:
        """Authorization header for the current token, if any."""
        if not authenticated or self._get_token is None:
            return {}
        try:
            token = await self._get_token()
        except Exception as e:
            logger.error(f"Error getting auth token: {e}")
            return {}
        return {"Authorization": f"Bearer {token}"} if token else {}

    async def _handle_unauthorized(self) -> None:
        """
        Run the unauthorized callback.

        Handles both sync and async callbacks. A failing callback is logged
        and does not mask the original 401.
        """
        if self._on_unauthorized is None:
            return
        try:
            result = self._on_unauthorized()
            if asyncio.iscoroutine(result):
                await result
        except Exception as e:
            logger.error(f"Unauthorized callback failed: {e}")

    def _safe_parse_json(self, response: httpx.Response) -> Any:
        """Parse a success body, returning an empty dict for empty or non-JSON bodies."""
        if response.status_code == 204 or not response.text.strip():
            return {}
        try:
            return response.json()
        except (ValueError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to parse JSON response: {e}, body: {response.text[:100]}")
            return {}

    async def send(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        params: dict[str, Any] | None = None,
        authenticated: bool = True,
    ) -> httpx.Response:
        """
        Issue a request and return the successful response.

        Args:
            method: HTTP method
            path: Path relative to the base URL
            json_body: JSON request body
            params: Query parameters
            authenticated: Attach the bearer token and apply the 401 policy

        Raises:
            DoctorApiError: Classified failure (see error_handler)
        """
        client = await self._ensure_client()
        headers = await self._get_headers(authenticated)

        try:
            response = await asyncio.wait_for(
                client.request(
                    method,
                    path,
                    json=json_body,
                    params=params,
                    headers=headers,
                ),
                timeout=self._timeout,
            )
        except (httpx.HTTPError, asyncio.TimeoutError) as e:
            failure = ApiFailure.from_exception(e)
            logger.warning(f"{method} {path} failed without response: {e!r}")
            raise error_from_failure(failure) from e

        if response.status_code == 401 and authenticated:
            logger.warning(f"{method} {path} returned 401, invalidating session")
            await self._handle_unauthorized()

        if response.is_error:
            failure = ApiFailure.from_response(response)
            logger.warning(f"{method} {path} returned {response.status_code}")
            raise error_from_failure(failure)

        logger.debug(f"{method} {path} -> {response.status_code}")
        return response

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Issue a request and return the decoded JSON body."""
        response = await self.send(method, path, **kwargs)
        return self._safe_parse_json(response)

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, json_body: Any = None, **kwargs: Any) -> Any:
        return await self.request("POST", path, json_body=json_body, **kwargs)

    async def put(self, path: str, json_body: Any = None, **kwargs: Any) -> Any:
        return await self.request("PUT", path, json_body=json_body, **kwargs)
