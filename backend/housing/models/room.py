from __future__ import annotations

from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class RoomStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    RESERVED = "RESERVED"
    MAINTENANCE = "MAINTENANCE"


class Room(SQLModel, table=True):
    """Housing room.

    ``current_occupancy`` counts active assignments plus guests of active
    hostings. ``status`` is derived by the occupancy ledger; the only
    input set by hand is ``under_maintenance``.
    """

    __tablename__ = "rooms"
    __table_args__ = (
        UniqueConstraint("floor_id", "room_number", name="uq_rooms_floor_room_number"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    floor_id: UUID = Field(foreign_key="floors.id", index=True)
    room_number: str = Field(max_length=50)
    capacity: int = Field(default=1, ge=1)
    current_occupancy: int = Field(default=0, ge=0)
    status: str = Field(default=RoomStatus.AVAILABLE.value, max_length=20, index=True)
    under_maintenance: bool = Field(default=False)
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()
