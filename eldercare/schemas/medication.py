import re
from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _clean_times(value: List[str]) -> List[str]:
    cleaned: List[str] = []
    for item in value:
        item = item.strip()
        if not TIME_PATTERN.match(item):
            raise ValueError(f"Invalid time {item!r}, expected HH:MM")
        if item not in cleaned:
            cleaned.append(item)
    return sorted(cleaned)


MedicationTimes = Annotated[List[str], AfterValidator(_clean_times)]


class MedicationCreate(BaseModel):
    senior_id: str
    name: str = Field(..., min_length=1)
    dosage: str = Field(..., min_length=1)
    frequency: str = "daily"
    times: MedicationTimes = Field(default_factory=lambda: ["09:00"], min_length=1)
    color: Optional[str] = None
    instructions: Optional[str] = None


class MedicationUpdate(BaseModel):
    name: Optional[str] = None
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    times: Optional[MedicationTimes] = None
    color: Optional[str] = None
    instructions: Optional[str] = None


class MedicationRecord(BaseModel):
    id: str
    senior_id: str
    name: str
    dosage: str
    frequency: str
    times: List[str] = Field(default_factory=list)
    color: Optional[str] = None
    instructions: Optional[str] = None
    is_active: bool
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)
