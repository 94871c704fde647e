"""
Doctor Models.

Request and response payloads for the doctor authentication endpoints.
Field names follow the server's camelCase JSON.
"""

from typing import Any, ClassVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

JWT_VERIFIED_MESSAGE = "JWT verified"


class DoctorProfile(BaseModel):
    """
    Server-owned doctor record.

    All fields are optional and displayed as-is. Unknown fields are kept so
    the cached record round-trips unchanged.
    """

    id: str | None = Field(None, alias="_id")
    name: str | None = None
    email: str | None = None
    phoneNumber: str | None = None
    nmrNumber: str | None = None
    specialization: str | None = None
    aboutMe: str | None = None
    profileImage: str | None = None

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_record(self) -> dict[str, Any]:
        """Serialize back to the server's JSON shape."""
        return self.model_dump(by_alias=True, exclude_none=True)


class SignupRequest(BaseModel):
    """Payload for POST doctor/auth/signup."""

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "name",
        "phoneNumber",
        "email",
        "nmrNumber",
        "password",
        "specialization",
    )

    name: str
    phoneNumber: str
    email: str
    nmrNumber: str
    password: str
    specialization: str
    aboutMe: str | None = None


class LoginRequest(BaseModel):
    """Payload for POST doctor/auth/login."""

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("email", "password")

    email: str
    password: str


class AuthResponse(BaseModel):
    """
    Response from signup and login.

    Signup may answer without a token. persisted is set by the client and
    tells whether the token was stored in the session.
    """

    token: str | None = Field(None, validation_alias=AliasChoices("token", "accessToken", "access_token"))
    doctor: dict[str, Any] | None = Field(None, validation_alias=AliasChoices("doctor", "user"))
    message: str | None = None
    persisted: bool = Field(False, exclude=True)

    model_config = ConfigDict(extra="allow")


class JwtVerification(BaseModel):
    """Response from POST doctor/auth/jwt."""

    message: str | None = None
    doctor: dict[str, Any] | None = None

    model_config = ConfigDict(extra="allow")

    @property
    def is_verified(self) -> bool:
        return self.message == JWT_VERIFIED_MESSAGE and bool(self.doctor)
