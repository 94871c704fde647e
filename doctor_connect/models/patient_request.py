"""Patient consultation request models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class RequestPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


_STATUS_PRIORITY = {
    "pending": RequestPriority.HIGH,
    "accepted": RequestPriority.MEDIUM,
    "rejected": RequestPriority.LOW,
}


class PatientRequest(BaseModel):
    """A consultation request from a patient. Fields are passed through unchanged."""

    id: str | None = Field(None, alias="_id")
    appointmentId: str | None = None
    doctorName: str | None = None
    doctorPhoneNumber: str | None = None
    patientName: str | None = None
    patientPhoneNumber: str | None = None
    status: str | None = None
    reqTime: str | None = None
    acceptTime: str | None = None

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @property
    def priority(self) -> RequestPriority:
        if not self.status:
            return RequestPriority.LOW
        return _STATUS_PRIORITY.get(self.status.lower(), RequestPriority.LOW)

    @property
    def is_pending(self) -> bool:
        return (self.status or "").lower() == "pending"
