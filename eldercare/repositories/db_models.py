"""
SQLModel table definitions for persistence.

All datetime columns are plain DateTime holding naive UTC.
"""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, Column, DateTime
from sqlmodel import Field, SQLModel


class Guardian(SQLModel, table=True):
    id: str = Field(primary_key=True)
    full_name: str
    phone: Optional[str] = Field(default=None, index=True)
    email: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime)


class Senior(SQLModel, table=True):
    id: str = Field(primary_key=True)
    name: str
    preferred_name: Optional[str] = None
    photo_url: Optional[str] = None
    language: Optional[str] = "hinglish"
    chronic_conditions: Optional[Any] = Field(default=None, sa_column=Column(JSON))
    emergency_contacts: Optional[Any] = Field(default=None, sa_column=Column(JSON))
    nudge_frequency: Optional[str] = None
    # Stored as entered; see DESIGN.md
    family_pin: Optional[str] = Field(default=None, index=True)
    guardian_email: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime)


class GuardianSeniorLink(SQLModel, table=True):
    id: str = Field(primary_key=True)
    guardian_id: str = Field(foreign_key="guardian.id", index=True)
    senior_id: str = Field(foreign_key="senior.id", index=True)
    relationship: Optional[str] = None
    is_primary: bool = False
    created_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime)


class Medication(SQLModel, table=True):
    id: str = Field(primary_key=True)
    senior_id: str = Field(foreign_key="senior.id", index=True)
    name: str
    dosage: str
    frequency: str = "daily"
    # Ordered list of "HH:MM" strings, facility-local
    times: Optional[Any] = Field(default=None, sa_column=Column(JSON))
    color: Optional[str] = None
    instructions: Optional[str] = None
    is_active: bool = Field(default=True, index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime)


class MedicationLog(SQLModel, table=True):
    id: str = Field(primary_key=True)
    medication_id: str = Field(foreign_key="medication.id", index=True)
    senior_id: str = Field(foreign_key="senior.id", index=True)
    scheduled_time: datetime = Field(index=True, sa_type=DateTime)
    status: str = Field(default="pending", index=True)
    taken_at: Optional[datetime] = Field(default=None, sa_type=DateTime)
    snoozed_until: Optional[datetime] = Field(default=None, sa_type=DateTime)
    created_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime)


class ActivityLog(SQLModel, table=True):
    id: str = Field(primary_key=True)
    senior_id: str = Field(foreign_key="senior.id", index=True)
    activity_type: str
    activity_data: Optional[Any] = Field(default=None, sa_column=Column(JSON))
    logged_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime)


class Notification(SQLModel, table=True):
    id: str = Field(primary_key=True)
    type: str
    title: str
    message: str
    senior_id: Optional[str] = Field(default=None, index=True)
    guardian_id: Optional[str] = Field(default=None, index=True)
    urgency_level: int = 2
    is_read: bool = False
    created_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime)


class HealthVital(SQLModel, table=True):
    id: str = Field(primary_key=True)
    senior_id: str = Field(foreign_key="senior.id", index=True)
    vital_type: str
    value: float
    unit: str
    notes: Optional[str] = None
    recorded_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime)


class JoyPreference(SQLModel, table=True):
    id: str = Field(primary_key=True)
    senior_id: str = Field(foreign_key="senior.id", index=True)
    ai_suggestions_enabled: bool = True
    suno_config: Optional[Any] = Field(default=None, sa_column=Column(JSON))
    dekho_config: Optional[Any] = Field(default=None, sa_column=Column(JSON))
    khel_config: Optional[Any] = Field(default=None, sa_column=Column(JSON))
    yaadein_config: Optional[Any] = Field(default=None, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime)
