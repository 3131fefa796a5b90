from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ActivityLogCreate(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    action: str = Field(min_length=1, max_length=500)


class ActivityLogRead(BaseModel):
    id: UUID
    username: str
    action: str
    user_id: Optional[UUID] = None
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)
