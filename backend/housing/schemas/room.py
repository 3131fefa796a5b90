from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from housing.models.room import RoomStatus


class RoomCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    floor_id: UUID
    room_number: str = Field(min_length=1, max_length=50)
    capacity: int = Field(ge=1)
    # Only MAINTENANCE is kept as given; other statuses are derived
    status: Optional[RoomStatus] = None


class RoomUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    room_number: Optional[str] = Field(default=None, min_length=1, max_length=50)
    capacity: Optional[int] = Field(default=None, ge=1)
    status: Optional[RoomStatus] = None


class RoomRead(BaseModel):
    id: UUID
    floor_id: UUID
    room_number: str
    capacity: int
    current_occupancy: int
    status: RoomStatus
    under_maintenance: bool
    created_at: datetime
    updated_at: datetime
    # Location info (populated by API)
    floor_number: Optional[str] = None
    building_id: Optional[UUID] = None
    building_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
