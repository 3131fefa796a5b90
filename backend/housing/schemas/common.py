from __future__ import annotations

from typing import Generic, Optional, TypeVar

from fastapi import status
from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Uniform success envelope: ``{code, data, message?}``."""

    code: int
    data: Optional[T] = None
    message: Optional[str] = None

    @classmethod
    def create(
        cls,
        data: Optional[T] = None,
        message: Optional[str] = None,
        code: int = status.HTTP_200_OK,
    ) -> ApiResponse[T]:
        return cls(code=code, data=data, message=message)


class ErrorResponse(BaseModel):
    code: int
    message: str
    stack: Optional[str] = None
