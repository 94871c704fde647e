from .doctor import (
    JWT_VERIFIED_MESSAGE,
    AuthResponse,
    DoctorProfile,
    JwtVerification,
    LoginRequest,
    SignupRequest,
)
from .patient_request import PatientRequest, RequestPriority
from .session import SESSION_KEYS, TOKEN_KEY, USER_DATA_KEY, Session

__all__ = [
    "AuthResponse",
    "DoctorProfile",
    "JWT_VERIFIED_MESSAGE",
    "JwtVerification",
    "LoginRequest",
    "PatientRequest",
    "RequestPriority",
    "SESSION_KEYS",
    "Session",
    "SignupRequest",
    "TOKEN_KEY",
    "USER_DATA_KEY",
]
