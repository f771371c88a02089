from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ActivityRecord(BaseModel):
    id: str
    senior_id: str
    activity_type: str
    activity_data: Optional[Any] = None
    logged_at: datetime
    model_config = ConfigDict(from_attributes=True)


class HealthVitalBase(BaseModel):
    senior_id: str = Field(..., description="Senior the reading belongs to")
    vital_type: str = Field(..., min_length=1, description="e.g. blood_pressure_systolic, blood_sugar")
    value: float
    unit: str = Field(..., min_length=1)
    notes: Optional[str] = None


class HealthVitalCreate(HealthVitalBase):
    recorded_at: Optional[datetime] = Field(default=None, description="When the reading was taken")


class HealthVitalRecord(HealthVitalBase):
    id: str
    recorded_at: datetime
    model_config = ConfigDict(from_attributes=True)
