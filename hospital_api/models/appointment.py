# hospital_api/models/appointment.py

from datetime import date, datetime, time
from enum import Enum

from bson import ObjectId
from dateutil.parser import isoparse
from pydantic import BaseModel, ConfigDict, Field, field_validator


class AppointmentStatus(str, Enum):
    SCHEDULED = "Scheduled"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class AppointmentCreate(BaseModel):
    # Unknown fields are kept and stored with the appointment
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    doctor_id: str = Field(..., alias="doctorId")
    patient_id: str = Field(..., alias="patientId")
    appointment_date: datetime = Field(..., alias="appointmentDate")
    status: AppointmentStatus = AppointmentStatus.SCHEDULED

    @field_validator("doctor_id", "patient_id")
    @classmethod
    def validate_object_id(cls, v: str) -> str:
        if not ObjectId.is_valid(v):
            raise ValueError(f"'{v}' is not a valid ObjectId")
        return v

    @field_validator("appointment_date", mode="before")
    @classmethod
    def parse_appointment_date(cls, v):
        if isinstance(v, str):
            try:
                return isoparse(v)
            except ValueError:
                raise ValueError(f"'{v}' is not an ISO-8601 date")
        if isinstance(v, date) and not isinstance(v, datetime):
            return datetime.combine(v, time())
        return v

    def to_document(self) -> dict:
        """Return the record as stored in the appointments collection."""
        doc = {
            "doctorId": ObjectId(self.doctor_id),
            "patientId": ObjectId(self.patient_id),
            "appointmentDate": self.appointment_date,
            "status": self.status.value,
        }
        doc.update(self.model_extra or {})
        return doc
