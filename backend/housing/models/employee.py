from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class EmployeeStatus(str, Enum):
    ACTIVE = "ACTIVE"
    ON_LEAVE = "ON_LEAVE"
    TERMINATED = "TERMINATED"


class Employee(SQLModel, table=True):
    """Staff member who can be housed."""

    __tablename__ = "employees"

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    employee_code: str = Field(index=True, unique=True, max_length=50)
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    national_id: str = Field(index=True, unique=True, max_length=50)
    job_title: str = Field(max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    department: str = Field(max_length=255, index=True)
    status: str = Field(default=EmployeeStatus.ACTIVE.value, max_length=20)
    contract_end_date: datetime
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()
