from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class EmergencyContact(BaseModel):
    name: str
    phone: str
    relationship: Optional[str] = None


class SeniorCreate(BaseModel):
    """
    Onboarding payload: creates the senior, links it to the guardian and
    seeds default joy preferences.
    """
    guardian_id: str = Field(..., min_length=1, description="Guardian completing onboarding")
    name: str = Field(..., min_length=1, max_length=255)
    preferred_name: Optional[str] = None
    photo_url: Optional[str] = None
    language: str = "hinglish"
    chronic_conditions: List[str] = Field(default_factory=list)
    emergency_contacts: List[EmergencyContact] = Field(default_factory=list)
    nudge_frequency: Optional[str] = None
    family_pin: str = Field(..., pattern=r"^[0-9]{4}$", description="4-digit family PIN")
    relationship: Optional[str] = "family"


class SeniorUpdate(BaseModel):
    name: Optional[str] = None
    preferred_name: Optional[str] = None
    photo_url: Optional[str] = None
    language: Optional[str] = None
    chronic_conditions: Optional[List[str]] = None
    emergency_contacts: Optional[List[EmergencyContact]] = None
    nudge_frequency: Optional[str] = None
    family_pin: Optional[str] = Field(default=None, pattern=r"^[0-9]{4}$")


class SeniorProfile(BaseModel):
    # family_pin is never returned
    id: str
    name: str
    preferred_name: Optional[str] = None
    photo_url: Optional[str] = None
    language: Optional[str] = None
    chronic_conditions: Optional[List[str]] = None
    emergency_contacts: Optional[List[Any]] = None
    nudge_frequency: Optional[str] = None
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class LinkedSenior(BaseModel):
    id: str
    name: str
    preferred_name: Optional[str] = None
    photo_url: Optional[str] = None
    language: Optional[str] = None
    is_primary: bool = False


class JoyPreferences(BaseModel):
    senior_id: str
    ai_suggestions_enabled: bool = True
    suno_config: Optional[Any] = None
    dekho_config: Optional[Any] = None
    khel_config: Optional[Any] = None
    yaadein_config: Optional[Any] = None
    model_config = ConfigDict(from_attributes=True)


class JoyPreferencesUpdate(BaseModel):
    ai_suggestions_enabled: Optional[bool] = None
    suno_config: Optional[Any] = None
    dekho_config: Optional[Any] = None
    khel_config: Optional[Any] = None
    yaadein_config: Optional[Any] = None
