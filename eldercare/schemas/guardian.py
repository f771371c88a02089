from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GuardianBase(BaseModel):
    full_name: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=32)
    email: Optional[str] = Field(default=None, max_length=255)


class GuardianCreate(GuardianBase):
    full_name: str = Field(..., min_length=1, max_length=255)


class GuardianProfile(GuardianBase):
    id: str
    model_config = ConfigDict(from_attributes=True)
