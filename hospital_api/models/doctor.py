# hospital_api/models/doctor.py
from pydantic import BaseModel, Field
from typing import List


class Doctor(BaseModel):
    name: str
    specialty: str
    availability: List[str] = Field(default_factory=list, description="Day names, e.g. 'Monday'")
