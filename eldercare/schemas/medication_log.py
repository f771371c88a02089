from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class MedicationLogStatus(str, Enum):
    pending = "pending"
    taken = "taken"
    snoozed = "snoozed"
    missed = "missed"


class LogMedicationRequest(BaseModel):
    """
    Body of POST /log-medication.

    action is kept as a plain string so an unknown value gets the
    {success: false, error: "Invalid action"} reply instead of a 422.
    """
    action: Optional[str] = None
    medication_log_id: Optional[str] = None
    medication_id: Optional[str] = None
    senior_id: Optional[str] = None
    # 0 or null falls back to the default snooze
    snooze_minutes: Optional[int] = Field(default=None, ge=0, le=24 * 60)


class LogMedicationResponse(BaseModel):
    success: bool = True
    message: str
    medication_log_id: Optional[str] = None
    snoozed_until: Optional[str] = None


class ReminderScanResponse(BaseModel):
    success: bool = True
    medications_due: int
    created: int
    missed_updated: int
    checked_at: str


class MedicationLogRecord(BaseModel):
    id: str
    medication_id: str
    medication_name: Optional[str] = None
    dosage: Optional[str] = None
    senior_id: str
    scheduled_time: datetime
    status: MedicationLogStatus
    taken_at: Optional[datetime] = None
    snoozed_until: Optional[datetime] = None
