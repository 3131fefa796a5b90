from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class UploadRead(BaseModel):
    id: UUID
    filename: str
    original_filename: str
    content_type: str
    size: int
    url: str
    employee_id: Optional[UUID] = None
    room_id: Optional[UUID] = None
    maintenance_request_id: Optional[UUID] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
