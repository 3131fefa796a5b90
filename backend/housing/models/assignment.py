from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Index, text
from sqlmodel import Field, SQLModel


class Assignment(SQLModel, table=True):
    """An employee occupying a room; active while ``check_out_date`` is empty.

    The ledger never deletes rows: reassignment moves ``room_id`` and checkout
    stamps ``check_out_date``.
    """

    __tablename__ = "assignments"
    __table_args__ = (
        # One active assignment per employee
        Index(
            "uq_assignments_active_employee",
            "employee_id",
            unique=True,
            sqlite_where=text("check_out_date IS NULL"),
            postgresql_where=text("check_out_date IS NULL"),
        ),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    employee_id: UUID = Field(foreign_key="employees.id", index=True)
    room_id: UUID = Field(foreign_key="rooms.id", index=True)
    check_in_date: datetime
    expected_check_out_date: Optional[datetime] = None
    check_out_date: Optional[datetime] = Field(default=None, index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)

    @property
    def is_active(self) -> bool:
        return self.check_out_date is None
