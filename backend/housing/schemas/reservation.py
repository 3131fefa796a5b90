from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ReservationCreate(BaseModel):
    room_id: UUID
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    check_in_date: datetime
    check_out_date: Optional[datetime] = None
    notes: Optional[str] = Field(default=None, max_length=2000)
    guest_id_card_number: str = Field(min_length=1, max_length=50)
    guest_phone: str = Field(min_length=1, max_length=50)
    job_title: str = Field(min_length=1, max_length=255)
    department: str = Field(min_length=1, max_length=255)
    guests: List[Dict[str, Any]] = []


class ReservationUpdate(BaseModel):
    room_id: Optional[UUID] = None
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    check_in_date: Optional[datetime] = None
    check_out_date: Optional[datetime] = None
    notes: Optional[str] = Field(default=None, max_length=2000)
    guest_id_card_number: Optional[str] = Field(default=None, min_length=1, max_length=50)
    guest_phone: Optional[str] = Field(default=None, min_length=1, max_length=50)
    job_title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    department: Optional[str] = Field(default=None, min_length=1, max_length=255)
    guests: Optional[List[Dict[str, Any]]] = None


class ReservationRead(ReservationCreate):
    id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
