from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class ActivityLog(SQLModel, table=True):
    __tablename__ = "activity_logs"

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    username: str = Field(max_length=100, index=True)
    action: str = Field(max_length=500)
    # Left empty for system actions and unknown usernames
    user_id: Optional[UUID] = Field(default=None, foreign_key="users.id", nullable=True)
    timestamp: datetime = Field(default_factory=datetime.utcnow, nullable=False, index=True)
