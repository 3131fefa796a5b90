from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from housing.models.hosting import HostingStatus


class HostingCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    employee_id: UUID
    guest_first_name: str = Field(min_length=1, max_length=100)
    guest_last_name: str = Field(min_length=1, max_length=100)
    start_date: datetime
    end_date: datetime
    notes: Optional[str] = Field(default=None, max_length=2000)
    guests: List[Dict[str, Any]] = []
    status: HostingStatus = HostingStatus.ACTIVE


class HostingUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    guest_first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    guest_last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    notes: Optional[str] = Field(default=None, max_length=2000)
    guests: Optional[List[Dict[str, Any]]] = None
    status: Optional[HostingStatus] = None


class HostingRead(BaseModel):
    id: UUID
    employee_id: UUID
    guest_first_name: str
    guest_last_name: str
    start_date: datetime
    end_date: datetime
    notes: Optional[str] = None
    guests: List[Dict[str, Any]]
    status: HostingStatus
    counted_room_id: Optional[UUID] = None
    counted_guests: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
