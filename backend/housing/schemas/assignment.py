from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AssignmentCreate(BaseModel):
    employee_id: UUID
    room_id: UUID
    check_in_date: datetime
    expected_check_out_date: Optional[datetime] = None


class ReassignRequest(BaseModel):
    new_room_id: UUID


class CheckoutRequest(BaseModel):
    check_out_date: Optional[datetime] = None


class AssignmentRead(BaseModel):
    id: UUID
    employee_id: UUID
    room_id: UUID
    check_in_date: datetime
    expected_check_out_date: Optional[datetime] = None
    check_out_date: Optional[datetime] = None
    created_at: datetime
    # Related info (populated by API)
    employee_name: Optional[str] = None
    room_number: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ReassignResult(BaseModel):
    old_assignment: AssignmentRead
    new_assignment: AssignmentRead
