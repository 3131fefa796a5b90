from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class Upload(SQLModel, table=True):
    """Stored file owned by an employee (photo), a room or a maintenance request."""

    __tablename__ = "uploads"

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    filename: str = Field(max_length=255, index=True)
    original_filename: str = Field(max_length=255)
    path: str = Field(max_length=500)
    content_type: str = Field(max_length=100)
    size: int
    employee_id: Optional[UUID] = Field(
        default=None, foreign_key="employees.id", nullable=True, unique=True
    )
    room_id: Optional[UUID] = Field(
        default=None, foreign_key="rooms.id", nullable=True, index=True
    )
    maintenance_request_id: Optional[UUID] = Field(
        default=None, foreign_key="maintenance_requests.id", nullable=True, index=True
    )
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)
