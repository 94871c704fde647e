"""Tests for doctor, patient request and session models."""

import pytest

from doctor_connect.models import (
    AuthResponse,
    DoctorProfile,
    JwtVerification,
    PatientRequest,
    RequestPriority,
    Session,
)


class TestDoctorProfile:
    def test_round_trips_unknown_fields(self, sample_doctor):
        record = {**sample_doctor, "rating": 4.8, "clinic": {"city": "Pune"}}

        assert DoctorProfile.model_validate(record).to_record() == record

    def test_all_fields_optional(self):
        assert DoctorProfile.model_validate({}).to_record() == {}


class TestPatientRequest:
    @pytest.mark.parametrize(
        "status,priority",
        [
            ("pending", RequestPriority.HIGH),
            ("PENDING", RequestPriority.HIGH),
            ("accepted", RequestPriority.MEDIUM),
            ("rejected", RequestPriority.LOW),
            ("cancelled", RequestPriority.LOW),
            (None, RequestPriority.LOW),
            ("", RequestPriority.LOW),
        ],
    )
    def test_priority_from_status(self, status, priority):
        assert PatientRequest(status=status).priority == priority

    def test_id_alias(self):
        request = PatientRequest.model_validate({"_id": "req-1", "status": "pending"})
        assert request.id == "req-1"
        assert request.is_pending


class TestAuthModels:
    def test_jwt_verified_requires_message_and_doctor(self, sample_doctor):
        assert JwtVerification(message="JWT verified", doctor=sample_doctor).is_verified
        assert not JwtVerification(message="JWT verified").is_verified
        assert not JwtVerification(message="ok", doctor=sample_doctor).is_verified

    def test_auth_response_token_aliases(self):
        assert AuthResponse.model_validate({"accessToken": "a"}).token == "a"
        assert AuthResponse.model_validate({"access_token": "b"}).token == "b"


def test_session_authenticated_only_with_token():
    assert Session(token="abc").is_authenticated
    assert not Session(user_data={"name": "x"}).is_authenticated
