from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class Reservation(SQLModel, table=True):
    """Forward booking of a room, independent of employee assignments."""

    __tablename__ = "reservations"

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    room_id: UUID = Field(foreign_key="rooms.id", index=True)
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    check_in_date: datetime
    check_out_date: Optional[datetime] = None
    notes: Optional[str] = Field(default=None, max_length=2000)
    guest_id_card_number: str = Field(max_length=50)
    guest_phone: str = Field(max_length=50)
    job_title: str = Field(max_length=255)
    department: str = Field(max_length=255)
    guests: List[Dict[str, Any]] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()
