from __future__ import annotations

import logging
from typing import Any, Dict, List
from uuid import UUID

from sqlmodel import Session

from housing.core.exceptions import BadRequestError, NotFoundError
from housing.models import Employee, Hosting, HostingStatus
from housing.repositories import Repository, SqlRepository
from housing.services.occupancy import OccupancyLedger

logger = logging.getLogger(__name__)


class HostingService:
    """Hosting CRUD with the guest side effects applied in the same transaction."""

    def __init__(self, repository: Repository[Hosting], ledger: OccupancyLedger) -> None:
        self.repository = repository
        self.ledger = ledger

    @classmethod
    def for_session(cls, session: Session) -> HostingService:
        repository = SqlRepository(session, Hosting, order_by=Hosting.start_date.desc())
        return cls(repository, OccupancyLedger(session))

    def list(self, **filters: Any) -> List[Hosting]:
        return self.repository.list(**filters)

    def get(self, hosting_id: UUID) -> Hosting:
        hosting = self.repository.find_by_id(hosting_id)
        if hosting is None:
            raise NotFoundError("Hosting not found")
        return hosting

    @staticmethod
    def _check_dates(data: Dict[str, Any]) -> None:
        start, end = data.get("start_date"), data.get("end_date")
        if start and end and end < start:
            raise BadRequestError("End date must be after start date")

    def create(self, data: Dict[str, Any]) -> Hosting:
        self._check_dates(data)
        with self.ledger.transaction():
            if not self.ledger.session.get(Employee, data["employee_id"]):
                raise NotFoundError("Employee not found")
            hosting = self.repository.insert(Hosting(**data))
            self.ledger.check_in_guests(hosting)
        logger.info(f"Created hosting {hosting.id} for employee {hosting.employee_id}")
        return self.get(hosting.id)

    def update(self, hosting_id: UUID, data: Dict[str, Any]) -> Hosting:
        with self.ledger.transaction():
            hosting = self.get(hosting_id)
            self._check_dates(
                {
                    "start_date": data.get("start_date", hosting.start_date),
                    "end_date": data.get("end_date", hosting.end_date),
                }
            )
            completing = (
                data.get("status") == HostingStatus.COMPLETED.value
                and hosting.status != HostingStatus.COMPLETED.value
            )
            hosting = self.repository.update(hosting, data)
            if completing:
                self.ledger.check_out_guests(hosting)
        logger.info(f"Updated hosting {hosting_id}")
        return self.get(hosting_id)

    def delete(self, hosting_id: UUID) -> None:
        with self.ledger.transaction():
            hosting = self.get(hosting_id)
            # Guests still counted against a room leave with the record
            self.ledger.check_out_guests(hosting)
            self.repository.delete(hosting)
        logger.info(f"Deleted hosting {hosting_id}")
