# ============================================================================
# Tests for Doctor API HTTP Client
# ============================================================================
"""
Tests for DoctorApiHttpClient.

Verifies:
- Bearer token attached only when a token is available
- 401 invokes the unauthorized callback (sync or async), once, without retry
- 5xx, timeouts and connection failures are raised as classified errors
- Fixed timeout and base URL
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from doctor_connect.integrations.doctor_api.error_handler import NETWORK_ERROR_MESSAGE, TIMEOUT_ERROR_MESSAGE
from doctor_connect.integrations.doctor_api.exceptions import (
    ApiErrorKind,
    DoctorApiAuthError,
    DoctorApiConnectionError,
    DoctorApiServerError,
)
from doctor_connect.integrations.doctor_api.http_client import DoctorApiHttpClient

BASE_URL = "http://doctor-api.test/"


class RecordingHandler:
    """MockTransport handler that records requests and replays a fixed response."""

    def __init__(self, response_factory):
        self.requests: list[httpx.Request] = []
        self._response_factory = response_factory

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._response_factory(request)


def _client(handler, token="test_token_123", on_unauthorized=None) -> DoctorApiHttpClient:
    return DoctorApiHttpClient(
        base_url=BASE_URL,
        token_provider=AsyncMock(return_value=token),
        on_unauthorized=on_unauthorized,
        transport=httpx.MockTransport(handler),
    )


class TestAuthorizationHeader:
    """Test bearer token handling."""

    @pytest.mark.asyncio
    async def test_attaches_bearer_token(self):
        handler = RecordingHandler(lambda r: httpx.Response(200, json={"status": "ok"}))

        async with _client(handler) as client:
            result = await client.get("doctor/patient-requests")

        assert result == {"status": "ok"}
        assert handler.requests[0].headers["Authorization"] == "Bearer test_token_123"
        assert handler.requests[0].headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_no_header_without_token(self):
        handler = RecordingHandler(lambda r: httpx.Response(200, json={}))

        async with _client(handler, token=None) as client:
            await client.get("doctor/patient-requests")

        assert "Authorization" not in handler.requests[0].headers

    @pytest.mark.asyncio
    async def test_unauthenticated_request_skips_token_lookup(self):
        handler = RecordingHandler(lambda r: httpx.Response(200, json={}))
        client = _client(handler)

        async with client:
            await client.post("doctor/auth/jwt", {"token": "abc"}, authenticated=False)

        client._get_token.assert_not_awaited()
        assert "Authorization" not in handler.requests[0].headers

    @pytest.mark.asyncio
    async def test_failing_token_provider_sends_without_header(self):
        handler = RecordingHandler(lambda r: httpx.Response(200, json={}))
        client = DoctorApiHttpClient(
            base_url=BASE_URL,
            token_provider=AsyncMock(side_effect=OSError("disk unavailable")),
            transport=httpx.MockTransport(handler),
        )

        async with client:
            await client.get("doctor/patient-requests")

        assert "Authorization" not in handler.requests[0].headers

    @pytest.mark.asyncio
    async def test_paths_resolve_against_base_url(self):
        handler = RecordingHandler(lambda r: httpx.Response(200, json={}))

        async with _client(handler) as client:
            await client.post("doctor/auth/login", {"email": "a@b.c", "password": "x"})

        assert str(handler.requests[0].url) == "http://doctor-api.test/doctor/auth/login"


class TestUnauthorizedPolicy:
    """Test the 401 logout-on-expiry callback."""

    @pytest.mark.asyncio
    async def test_401_invokes_async_callback(self):
        handler = RecordingHandler(lambda r: httpx.Response(401, json={"message": "jwt expired"}))
        callback = AsyncMock(return_value=True)

        async with _client(handler, on_unauthorized=callback) as client:
            with pytest.raises(DoctorApiAuthError) as exc_info:
                await client.get("doctor/patient-requests")

        callback.assert_awaited_once()
        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "jwt expired"
        # No retry after 401
        assert len(handler.requests) == 1

    @pytest.mark.asyncio
    async def test_401_invokes_sync_callback(self):
        handler = RecordingHandler(lambda r: httpx.Response(401))
        callback = MagicMock(return_value=None)

        async with _client(handler, on_unauthorized=callback) as client:
            with pytest.raises(DoctorApiAuthError) as exc_info:
                await client.get("doctor/patient-requests")

        callback.assert_called_once()
        assert exc_info.value.message == "Unauthorized. Please check your credentials."

    @pytest.mark.asyncio
    async def test_failing_callback_does_not_mask_401(self):
        handler = RecordingHandler(lambda r: httpx.Response(401))
        callback = AsyncMock(side_effect=RuntimeError("storage broken"))

        async with _client(handler, on_unauthorized=callback) as client:
            with pytest.raises(DoctorApiAuthError):
                await client.get("doctor/patient-requests")

    @pytest.mark.asyncio
    async def test_403_does_not_invoke_callback(self):
        handler = RecordingHandler(lambda r: httpx.Response(403))
        callback = AsyncMock()

        async with _client(handler, on_unauthorized=callback) as client:
            with pytest.raises(DoctorApiAuthError):
                await client.get("doctor/patient-requests")

        callback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unauthenticated_401_does_not_invoke_callback(self):
        handler = RecordingHandler(lambda r: httpx.Response(401))
        callback = AsyncMock()

        async with _client(handler, on_unauthorized=callback) as client:
            with pytest.raises(DoctorApiAuthError):
                await client.post("doctor/auth/jwt", {"token": "abc"}, authenticated=False)

        callback.assert_not_awaited()


class TestFailures:
    """Test server errors and failures without a response."""

    @pytest.mark.asyncio
    async def test_500_fails_once_without_retry(self):
        handler = RecordingHandler(lambda r: httpx.Response(500, text="Internal Server Error"))

        async with _client(handler) as client:
            with pytest.raises(DoctorApiServerError) as exc_info:
                await client.get("doctor/patient-requests")

        assert exc_info.value.kind == ApiErrorKind.SERVER
        assert exc_info.value.message == "Internal server error. Please try again later."
        assert len(handler.requests) == 1

    @pytest.mark.asyncio
    async def test_timeout_raises_connection_error(self):
        def raise_timeout(request):
            raise httpx.ReadTimeout("timed out", request=request)

        async with _client(RecordingHandler(raise_timeout)) as client:
            with pytest.raises(DoctorApiConnectionError) as exc_info:
                await client.get("doctor/patient-requests")

        assert exc_info.value.kind == ApiErrorKind.TIMEOUT
        assert exc_info.value.message == TIMEOUT_ERROR_MESSAGE
        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.TimeoutException)

    @pytest.mark.asyncio
    async def test_slow_response_hits_overall_timeout(self):
        async def stall(request):
            await asyncio.sleep(5)
            return httpx.Response(200, json={})

        client = DoctorApiHttpClient(base_url=BASE_URL, timeout=0.05, transport=httpx.MockTransport(stall))

        async with client:
            with pytest.raises(DoctorApiConnectionError) as exc_info:
                await client.get("doctor/patient-requests")

        assert exc_info.value.kind == ApiErrorKind.TIMEOUT
        assert exc_info.value.message == TIMEOUT_ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_connect_error_raises_network_error(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(RecordingHandler(refuse)) as client:
            with pytest.raises(DoctorApiConnectionError) as exc_info:
                await client.get("doctor/patient-requests")

        assert exc_info.value.kind == ApiErrorKind.NETWORK
        assert exc_info.value.message == NETWORK_ERROR_MESSAGE


class TestResponseParsing:
    @pytest.mark.asyncio
    async def test_empty_body_returns_empty_dict(self):
        handler = RecordingHandler(lambda r: httpx.Response(204))

        async with _client(handler) as client:
            assert await client.post("doctor/patient-requests/1/accept") == {}

    @pytest.mark.asyncio
    async def test_invalid_json_returns_empty_dict(self):
        handler = RecordingHandler(lambda r: httpx.Response(200, text="not json"))

        async with _client(handler) as client:
            assert await client.get("doctor/patient-requests") == {}

    @pytest.mark.asyncio
    async def test_send_returns_response(self):
        handler = RecordingHandler(lambda r: httpx.Response(201, json={"token": "t"}))

        async with _client(handler) as client:
            response = await client.send("POST", "doctor/auth/signup", json_body={})

        assert response.status_code == 201


class TestConfiguration:
    def test_default_timeout_is_ten_seconds(self):
        client = DoctorApiHttpClient(base_url=BASE_URL)
        assert client.timeout == 10.0
        assert client.base_url == BASE_URL

    @pytest.mark.asyncio
    async def test_close_releases_client(self):
        client = DoctorApiHttpClient(base_url=BASE_URL)
        await client.initialize()
        assert client._client is not None
        await client.close()
        assert client._client is None
