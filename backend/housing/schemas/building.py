from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from housing.models.building import BuildingStatus


class BuildingCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(min_length=1, max_length=255)
    location: Optional[str] = Field(default=None, max_length=255)
    status: BuildingStatus = BuildingStatus.ACTIVE


class BuildingUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    location: Optional[str] = Field(default=None, max_length=255)
    status: Optional[BuildingStatus] = None


class FloorCreate(BaseModel):
    floor_number: str = Field(min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, max_length=500)


class FloorUpdate(BaseModel):
    floor_number: Optional[str] = Field(default=None, min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, max_length=500)


class FloorRead(BaseModel):
    id: UUID
    building_id: UUID
    floor_number: str
    description: Optional[str] = None
    rooms_count: int = 0

    model_config = ConfigDict(from_attributes=True)


class BuildingRead(BaseModel):
    id: UUID
    name: str
    location: Optional[str] = None
    status: BuildingStatus
    created_at: datetime
    updated_at: datetime
    floors: List[FloorRead] = []

    model_config = ConfigDict(from_attributes=True)
