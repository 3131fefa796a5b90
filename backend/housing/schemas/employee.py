from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from housing.models.employee import EmployeeStatus


class EmployeeBase(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    employee_code: str = Field(min_length=1, max_length=50)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    national_id: str = Field(min_length=1, max_length=50)
    job_title: str = Field(min_length=1, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    department: str = Field(min_length=1, max_length=255)
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    contract_end_date: datetime


class EmployeeCreate(EmployeeBase):
    pass


class EmployeeUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    employee_code: Optional[str] = Field(default=None, min_length=1, max_length=50)
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    national_id: Optional[str] = Field(default=None, min_length=1, max_length=50)
    job_title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    department: Optional[str] = Field(default=None, min_length=1, max_length=255)
    status: Optional[EmployeeStatus] = None
    contract_end_date: Optional[datetime] = None


class EmployeeRead(EmployeeBase):
    id: UUID
    created_at: datetime
    updated_at: datetime
    # Current housing (populated by API)
    current_room_id: Optional[UUID] = None
    photo_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)
