# hospital_api/models/patient.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional


class Patient(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    age: Optional[int] = None
    medical_history: Any = Field(default_factory=list, alias="medicalHistory")
