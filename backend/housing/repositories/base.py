"""Storage-agnostic repository interface.

Services that only need row-level access (activity log, hostings,
reservations) take a ``Repository`` so the same code runs against the
database in production and against a plain dict in tests or tooling.
Repositories never commit; the caller owns the transaction.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Generic, List, Optional, Protocol, Type, TypeVar
from uuid import UUID

from sqlmodel import Session, SQLModel, func, select

ModelT = TypeVar("ModelT", bound=SQLModel)


class Repository(Protocol[ModelT]):
    def list(self, **filters: Any) -> List[ModelT]: ...

    def count(self, **filters: Any) -> int: ...

    def insert(self, obj: ModelT) -> ModelT: ...

    def find_by_id(self, obj_id: UUID) -> Optional[ModelT]: ...

    def update(self, obj: ModelT, data: Dict[str, Any]) -> ModelT: ...

    def delete(self, obj: ModelT) -> None: ...


def _apply(obj: SQLModel, data: Dict[str, Any]) -> None:
    for field, value in data.items():
        setattr(obj, field, value)
    touch = getattr(obj, "touch", None)
    if callable(touch):
        touch()


class SqlRepository(Generic[ModelT]):
    """Repository backed by a SQLModel session."""

    def __init__(
        self,
        session: Session,
        model: Type[ModelT],
        order_by: Optional[Any] = None,
    ) -> None:
        self.session = session
        self.model = model
        self.order_by = order_by

    def _where(self, statement, filters: Dict[str, Any]):
        for field, value in filters.items():
            statement = statement.where(getattr(self.model, field) == value)
        return statement

    def list(self, **filters: Any) -> List[ModelT]:
        statement = self._where(select(self.model), filters)
        if self.order_by is not None:
            statement = statement.order_by(self.order_by)
        return list(self.session.exec(statement).all())

    def count(self, **filters: Any) -> int:
        statement = self._where(select(func.count()).select_from(self.model), filters)
        return self.session.exec(statement).one()

    def insert(self, obj: ModelT) -> ModelT:
        self.session.add(obj)
        self.session.flush()
        return obj

    def find_by_id(self, obj_id: UUID) -> Optional[ModelT]:
        return self.session.get(self.model, obj_id)

    def update(self, obj: ModelT, data: Dict[str, Any]) -> ModelT:
        _apply(obj, data)
        self.session.add(obj)
        self.session.flush()
        return obj

    def delete(self, obj: ModelT) -> None:
        self.session.delete(obj)
        self.session.flush()


class InMemoryRepository(Generic[ModelT]):
    """Process-lifetime repository keeping rows in a dict."""

    def __init__(self, sort_key: Optional[Callable[[ModelT], Any]] = None, reverse: bool = False) -> None:
        self._rows: Dict[UUID, ModelT] = {}
        self.sort_key = sort_key
        self.reverse = reverse

    @staticmethod
    def _matches(obj: ModelT, filters: Dict[str, Any]) -> bool:
        return all(getattr(obj, field) == value for field, value in filters.items())

    def list(self, **filters: Any) -> List[ModelT]:
        rows = [row for row in self._rows.values() if self._matches(row, filters)]
        if self.sort_key is not None:
            rows.sort(key=self.sort_key, reverse=self.reverse)
        return rows

    def count(self, **filters: Any) -> int:
        return len(self.list(**filters))

    def insert(self, obj: ModelT) -> ModelT:
        self._rows[obj.id] = obj
        return obj

    def find_by_id(self, obj_id: UUID) -> Optional[ModelT]:
        return self._rows.get(obj_id)

    def update(self, obj: ModelT, data: Dict[str, Any]) -> ModelT:
        _apply(obj, data)
        self._rows[obj.id] = obj
        return obj

    def delete(self, obj: ModelT) -> None:
        self._rows.pop(obj.id, None)
