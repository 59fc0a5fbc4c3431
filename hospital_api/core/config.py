# hospital_api/core/config.py

from typing import List
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # MongoDB settings
    MONGODB_URI: str = Field(
        default="mongodb://localhost:27017",
        validation_alias=AliasChoices("MONGODB_URI", "MONGO_URI"),
    )
    MONGODB_DB: str = Field(default="hospital")

    # Service settings
    SERVICE_NAME: str = Field(default="Hospital Management System API")
    LOG_LEVEL: str = Field(default="INFO")
    CORS_ORIGINS: List[str] = Field(default=["*"])

    # Analytics settings
    ACTIVE_PATIENT_MONTHS: int = Field(default=6, gt=0)
    ACTIVE_PATIENT_MIN_VISITS: int = Field(default=3, ge=0)
    TOP_SPECIALTIES_LIMIT: int = Field(default=3, gt=0)

settings = Settings()
