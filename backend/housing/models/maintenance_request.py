from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class MaintenanceStatus(str, Enum):
    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    RESOLVED = "RESOLVED"


class MaintenanceRequest(SQLModel, table=True):
    __tablename__ = "maintenance_requests"

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    room_id: UUID = Field(foreign_key="rooms.id", index=True)
    problem_type: str = Field(max_length=100)
    description: str = Field(max_length=5000)
    status: str = Field(default=MaintenanceStatus.OPEN.value, max_length=20, index=True)
    reported_at: datetime = Field(default_factory=datetime.utcnow, nullable=False, index=True)
    due_date: Optional[datetime] = None
    resolved_at: Optional[datetime] = None
    updated_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()
