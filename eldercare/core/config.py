from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = Field("Elder Care Companion")
    app_version: str = Field("0.1.0")

    database_url: str = Field("sqlite:///./data/app.db")
    session_file: str = Field("./data/session.json")

    # Facility-local clock; medication times carry no timezone of their own
    facility_utc_offset_minutes: int = Field(330)
    due_window_minutes: int = Field(15)
    missed_threshold_minutes: int = Field(60)
    default_snooze_minutes: int = Field(10)

    cors_allow_origins: List[str] = Field(default_factory=lambda: ["*"])

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
