from __future__ import annotations

from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class Floor(SQLModel, table=True):
    __tablename__ = "floors"

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    building_id: UUID = Field(foreign_key="buildings.id", index=True)
    floor_number: str = Field(max_length=50)
    description: Optional[str] = Field(default=None, max_length=500)
