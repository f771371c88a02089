from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class SessionRole(str, Enum):
    senior = "senior"
    guardian = "guardian"


class SeniorSession(BaseModel):
    senior_id: str
    senior_name: str
    preferred_name: Optional[str] = None
    photo_url: Optional[str] = None
    language: Optional[str] = None
    guardian_id: Optional[str] = None
    role: SessionRole = SessionRole.senior


class CachedSession(BaseModel):
    """What the session cache writes to disk."""
    mode: Optional[SessionRole] = None
    guardian_id: Optional[str] = None
    # True only when a guardian signed in (directly or by handing over to a senior)
    guardian_signed_in: bool = False
    senior: Optional[SeniorSession] = None


class PinRequest(BaseModel):
    pin: str = Field(..., description="4-digit family PIN")


class DualKeyRequest(BaseModel):
    phone: str = Field(..., description="Guardian phone, with or without country code")
    pin: str = Field(..., description="4-digit family PIN")


class SeniorModeRequest(BaseModel):
    guardian_id: str
    pin: str
    senior_id: Optional[str] = None


class RoleUpdate(BaseModel):
    role: SessionRole


class AuthResponse(BaseModel):
    success: bool
    error: Optional[str] = None
    session: Optional[CachedSession] = None
