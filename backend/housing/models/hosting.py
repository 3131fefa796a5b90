from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class HostingStatus(str, Enum):
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"


class Hosting(SQLModel, table=True):
    """Guests staying in an employee's room.

    ``counted_room_id``/``counted_guests`` record what the ledger added to a
    room's occupancy at check-in, so check-out subtracts the same amount from
    the same room even if the guest list or the assignment changed since.
    """

    __tablename__ = "hostings"

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    employee_id: UUID = Field(foreign_key="employees.id", index=True)
    guest_first_name: str = Field(max_length=100)
    guest_last_name: str = Field(max_length=100)
    start_date: datetime
    end_date: datetime
    notes: Optional[str] = Field(default=None, max_length=2000)
    guests: List[Dict[str, Any]] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    status: str = Field(default=HostingStatus.ACTIVE.value, max_length=20, index=True)
    counted_room_id: Optional[UUID] = Field(
        default=None, foreign_key="rooms.id", nullable=True
    )
    counted_guests: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()
