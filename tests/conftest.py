"""
Shared pytest fixtures for all tests.

Provides in-memory session storage, test settings and a helper that wires
a DoctorApi to an httpx.MockTransport.
"""

import os
from collections.abc import Callable

import httpx
import pytest

from doctor_connect.client import DoctorApi, create_doctor_api
from doctor_connect.config.settings import Settings
from doctor_connect.repositories.key_value_store import InMemoryKeyValueStore
from doctor_connect.services.session_store import SessionStore

# Ensure test environment
os.environ["ENVIRONMENT"] = "test"

TEST_BASE_URL = "http://doctor-api.test/"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        API_BASE_URL=TEST_BASE_URL,
        API_TIMEOUT_SECONDS=10.0,
        SESSION_STORAGE_BACKEND="memory",
        ENVIRONMENT="test",
    )


@pytest.fixture
def memory_backend() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def session_store(memory_backend) -> SessionStore:
    return SessionStore(memory_backend)


@pytest.fixture
def sample_doctor() -> dict:
    return {
        "_id": "doc-1",
        "name": "Dr. Asha Rao",
        "email": "asha@example.com",
        "phoneNumber": "9999999999",
        "nmrNumber": "NMR-42",
        "specialization": "Cardiology",
    }


@pytest.fixture
def make_api(test_settings, session_store) -> Callable[[Callable[[httpx.Request], httpx.Response]], DoctorApi]:
    """Build a DoctorApi whose HTTP traffic is answered by handler."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> DoctorApi:
        return create_doctor_api(
            settings=test_settings,
            session_store=session_store,
            transport=httpx.MockTransport(handler),
        )

    return _make
