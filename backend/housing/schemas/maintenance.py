from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from housing.models.maintenance_request import MaintenanceStatus


class MaintenanceRequestCreate(BaseModel):
    room_id: UUID
    problem_type: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=5000)
    due_date: Optional[datetime] = None


class MaintenanceRequestUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    problem_type: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, min_length=1, max_length=5000)
    status: Optional[MaintenanceStatus] = None
    due_date: Optional[datetime] = None


class MaintenanceRequestRead(BaseModel):
    id: UUID
    room_id: UUID
    problem_type: str
    description: str
    status: MaintenanceStatus
    reported_at: datetime
    due_date: Optional[datetime] = None
    resolved_at: Optional[datetime] = None
    updated_at: datetime
    room_number: Optional[str] = None
    images_count: int = 0

    model_config = ConfigDict(from_attributes=True)
