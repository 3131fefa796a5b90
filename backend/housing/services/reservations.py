from __future__ import annotations

import logging
from typing import Any, Dict, List
from uuid import UUID

from sqlmodel import Session

from housing.core.exceptions import BadRequestError, NotFoundError
from housing.models import Reservation, Room
from housing.repositories import Repository, SqlRepository
from housing.services.occupancy import OccupancyLedger

logger = logging.getLogger(__name__)


class ReservationService:
    """Reservation CRUD; the ledger re-derives the booked room's status."""

    def __init__(self, repository: Repository[Reservation], ledger: OccupancyLedger) -> None:
        self.repository = repository
        self.ledger = ledger

    @classmethod
    def for_session(cls, session: Session) -> ReservationService:
        repository = SqlRepository(session, Reservation, order_by=Reservation.check_in_date)
        return cls(repository, OccupancyLedger(session, repository))

    def list(self, **filters: Any) -> List[Reservation]:
        return self.repository.list(**filters)

    def get(self, reservation_id: UUID) -> Reservation:
        reservation = self.repository.find_by_id(reservation_id)
        if reservation is None:
            raise NotFoundError("Reservation not found")
        return reservation

    @staticmethod
    def _check_dates(data: Dict[str, Any]) -> None:
        check_in, check_out = data.get("check_in_date"), data.get("check_out_date")
        if check_in and check_out and check_out < check_in:
            raise BadRequestError("Check-out date must be after check-in date")

    def create(self, data: Dict[str, Any]) -> Reservation:
        self._check_dates(data)
        with self.ledger.transaction():
            if not self.ledger.session.get(Room, data["room_id"]):
                raise NotFoundError("Room not found")
            reservation = self.repository.insert(Reservation(**data))
            self.ledger.reserve(reservation.room_id)
        logger.info(f"Created reservation {reservation.id} for room {reservation.room_id}")
        return self.get(reservation.id)

    def update(self, reservation_id: UUID, data: Dict[str, Any]) -> Reservation:
        with self.ledger.transaction():
            reservation = self.get(reservation_id)
            self._check_dates(
                {
                    "check_in_date": data.get("check_in_date", reservation.check_in_date),
                    "check_out_date": data.get("check_out_date", reservation.check_out_date),
                }
            )
            old_room_id = reservation.room_id
            new_room_id = data.get("room_id") or old_room_id
            if new_room_id != old_room_id and not self.ledger.session.get(Room, new_room_id):
                raise NotFoundError("Room not found")

            self.repository.update(reservation, data)
            if new_room_id != old_room_id:
                self.ledger.release_reservation(old_room_id)
                self.ledger.reserve(new_room_id)
        logger.info(f"Updated reservation {reservation_id}")
        return self.get(reservation_id)

    def delete(self, reservation_id: UUID) -> None:
        with self.ledger.transaction():
            reservation = self.get(reservation_id)
            room_id = reservation.room_id
            self.repository.delete(reservation)
            self.ledger.release_reservation(room_id)
        logger.info(f"Deleted reservation {reservation_id}")
