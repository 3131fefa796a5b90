from __future__ import annotations

from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class SystemVariable(SQLModel, table=True):
    """Key/value row backing the typed system settings record."""

    __tablename__ = "system_variables"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    key: str = Field(index=True, unique=True, max_length=100)
    value: str = Field(max_length=1000)
