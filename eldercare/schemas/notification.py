from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class NotificationRecord(BaseModel):
    id: str
    type: str
    title: str
    message: str
    senior_id: Optional[str] = None
    guardian_id: Optional[str] = None
    urgency_level: int = Field(..., description="1 = high (missed), 2 = normal (due)")
    is_read: bool
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)
