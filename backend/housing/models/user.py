from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class UserRole(str, Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    SUPERVISOR = "SUPERVISOR"
    HR = "HR"
    MAINTENANCE = "MAINTENANCE"
    VIEWER = "VIEWER"


class UserStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class User(SQLModel, table=True):
    """Back-office account allowed to sign in to the housing panel."""

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    username: str = Field(index=True, unique=True, max_length=100)
    email: Optional[str] = Field(default=None, index=True, unique=True, max_length=255)
    hashed_password: str = Field(max_length=255)
    role: str = Field(default=UserRole.VIEWER.value, max_length=50)
    status: str = Field(default=UserStatus.ACTIVE.value, max_length=20)
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE
