"""Occupancy ledger.

Keeps ``Room.current_occupancy`` and ``Room.status`` consistent with active
assignments, guests of active hostings and reservations.

Occupancy changes are conditional UPDATE statements evaluated by the
database inside the transaction (``current_occupancy < capacity`` for a new
occupant, ``check_out_date IS NULL`` for closing an assignment), so two
requests racing for the last bed cannot both win. The partial unique index
on ``assignments.employee_id`` backs the one-active-assignment rule the same
way. Room status is never written ad hoc: every operation re-derives it with
``derive_status``.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, NamedTuple, Optional
from uuid import UUID

from sqlalchemy import case, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from housing.core.exceptions import BadRequestError, ConflictError, NotFoundError
from housing.models import (
    Assignment,
    Employee,
    Hosting,
    HostingStatus,
    Reservation,
    Room,
    RoomStatus,
)
from housing.repositories import Repository, SqlRepository

logger = logging.getLogger(__name__)


def derive_status(room: Room, occupancy: int, reservation_count: int) -> RoomStatus:
    """Compute a room's status from its source-of-truth counts."""
    if room.under_maintenance:
        return RoomStatus.MAINTENANCE
    if occupancy >= room.capacity:
        return RoomStatus.OCCUPIED
    if reservation_count > 0:
        return RoomStatus.RESERVED
    return RoomStatus.AVAILABLE


def find_active_assignment(session: Session, employee_id: UUID) -> Optional[Assignment]:
    statement = select(Assignment).where(
        Assignment.employee_id == employee_id,
        Assignment.check_out_date.is_(None),
    )
    return session.exec(statement).first()


class Reassignment(NamedTuple):
    old_assignment: Assignment
    new_assignment: Assignment


class OccupancyLedger:
    def __init__(
        self,
        session: Session,
        reservations: Optional[Repository[Reservation]] = None,
    ) -> None:
        self.session = session
        self.reservations = reservations or SqlRepository(session, Reservation)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Commit everything done inside the block, or roll all of it back."""
        try:
            yield
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    # -- room bookkeeping -------------------------------------------------

    def _add_occupants(self, room_id: UUID, count: int, enforce_capacity: bool = True) -> bool:
        statement = (
            update(Room)
            .where(Room.id == room_id)
            .values(current_occupancy=Room.current_occupancy + count)
            .execution_options(synchronize_session=False)
        )
        if enforce_capacity:
            statement = statement.where(Room.current_occupancy + count <= Room.capacity)
        result = self.session.exec(statement)
        return result.rowcount == 1

    def _remove_occupants(self, room: Room, count: int) -> None:
        # Earlier UPDATEs in this transaction bypass the identity map
        self.session.flush()
        self.session.refresh(room)
        if room.current_occupancy < count:
            logger.warning(
                f"Room {room.id} holds {room.current_occupancy} occupant(s), "
                f"cannot remove {count}; clamping at 0"
            )
        statement = (
            update(Room)
            .where(Room.id == room.id)
            .values(
                current_occupancy=case(
                    (Room.current_occupancy >= count, Room.current_occupancy - count),
                    else_=0,
                )
            )
            .execution_options(synchronize_session=False)
        )
        self.session.exec(statement)

    def refresh_status(self, room: Room) -> RoomStatus:
        """Reload the room's counters and store its derived status."""
        self.session.flush()
        self.session.refresh(room)
        status = derive_status(
            room,
            room.current_occupancy,
            self.reservations.count(room_id=room.id),
        )
        if room.status != status.value:
            logger.info(f"Room {room.room_number} ({room.id}): {room.status} -> {status.value}")
            room.status = status.value
        room.touch()
        self.session.add(room)
        self.session.flush()
        return status

    def _get_room(self, room_id: UUID, message: str = "Room not found") -> Room:
        room = self.session.get(Room, room_id)
        if not room:
            raise NotFoundError(message)
        return room

    def _get_active_assignment(self, assignment_id: UUID) -> Assignment:
        assignment = self.session.get(Assignment, assignment_id)
        if not assignment or assignment.check_out_date is not None:
            raise NotFoundError("Active assignment not found")
        return assignment

    # -- assignments --------------------------------------------------------

    def assign(
        self,
        employee_id: UUID,
        room_id: UUID,
        check_in_date: datetime,
        expected_check_out_date: Optional[datetime] = None,
    ) -> Assignment:
        with self.transaction():
            if not self.session.get(Employee, employee_id):
                raise NotFoundError("Employee not found")
            room = self._get_room(room_id)

            if find_active_assignment(self.session, employee_id):
                raise ConflictError("Employee is already assigned to a room")
            if not self._add_occupants(room.id, 1):
                raise ConflictError("Room is already at full capacity")

            assignment = Assignment(
                employee_id=employee_id,
                room_id=room_id,
                check_in_date=check_in_date,
                expected_check_out_date=expected_check_out_date,
            )
            self.session.add(assignment)
            try:
                self.session.flush()
            except IntegrityError:
                # Lost a race against a concurrent assign for the same employee
                raise ConflictError("Employee is already assigned to a room") from None

            self.refresh_status(room)

        self.session.refresh(assignment)
        logger.info(f"Assigned employee {employee_id} to room {room_id}")
        return assignment

    def reassign(self, assignment_id: UUID, new_room_id: UUID) -> Reassignment:
        with self.transaction():
            assignment = self._get_active_assignment(assignment_id)
            old_assignment = Assignment(**assignment.model_dump())
            new_room = self._get_room(new_room_id, "New room not found")
            if new_room.id == assignment.room_id:
                raise BadRequestError("Employee is already in this room")

            if not self._add_occupants(new_room.id, 1):
                raise ConflictError("New room is at full capacity")

            moved = self.session.exec(
                update(Assignment)
                .where(
                    Assignment.id == assignment.id,
                    Assignment.room_id == old_assignment.room_id,
                    Assignment.check_out_date.is_(None),
                )
                .values(room_id=new_room.id)
                .execution_options(synchronize_session=False)
            )
            if moved.rowcount != 1:
                raise NotFoundError("Active assignment not found")

            old_room = self.session.get(Room, old_assignment.room_id)
            if old_room:
                self._remove_occupants(old_room, 1)
                self.refresh_status(old_room)
            self.refresh_status(new_room)

        self.session.refresh(assignment)
        logger.info(
            f"Reassigned employee {assignment.employee_id} from room "
            f"{old_assignment.room_id} to {new_room_id}"
        )
        return Reassignment(old_assignment=old_assignment, new_assignment=assignment)

    def checkout(self, assignment_id: UUID, check_out_date: Optional[datetime] = None) -> Assignment:
        with self.transaction():
            assignment = self._get_active_assignment(assignment_id)
            closed = self.session.exec(
                update(Assignment)
                .where(
                    Assignment.id == assignment.id,
                    Assignment.check_out_date.is_(None),
                )
                .values(check_out_date=check_out_date or datetime.utcnow())
                .execution_options(synchronize_session=False)
            )
            if closed.rowcount != 1:
                raise NotFoundError("Active assignment not found")

            room = self.session.get(Room, assignment.room_id)
            if room:
                self._remove_occupants(room, 1)
                self.refresh_status(room)

        self.session.refresh(assignment)
        logger.info(f"Checked out employee {assignment.employee_id} from room {assignment.room_id}")
        return assignment

    # -- hostings (run inside the caller's transaction) ---------------------

    def check_in_guests(self, hosting: Hosting) -> None:
        """Add a new hosting's guests to the host's current room.

        No capacity check and no status change: guests may push occupancy
        above capacity.
        """
        guest_count = len(hosting.guests or [])
        if guest_count == 0 or hosting.status != HostingStatus.ACTIVE.value:
            return
        active = find_active_assignment(self.session, hosting.employee_id)
        if active is None:
            logger.info(f"Hosting {hosting.id}: employee {hosting.employee_id} has no room, guests not counted")
            return

        self._add_occupants(active.room_id, guest_count, enforce_capacity=False)
        hosting.counted_room_id = active.room_id
        hosting.counted_guests = guest_count
        self.session.add(hosting)
        self.session.flush()
        logger.info(f"Hosting {hosting.id}: {guest_count} guest(s) added to room {active.room_id}")

    def check_out_guests(self, hosting: Hosting) -> None:
        """Remove the guests counted at check-in; a no-op the second time."""
        if hosting.counted_room_id is None or hosting.counted_guests == 0:
            return
        room = self.session.get(Room, hosting.counted_room_id)
        if room:
            self._remove_occupants(room, hosting.counted_guests)
        logger.info(
            f"Hosting {hosting.id}: {hosting.counted_guests} guest(s) removed from room "
            f"{hosting.counted_room_id}"
        )
        hosting.counted_room_id = None
        hosting.counted_guests = 0
        self.session.add(hosting)
        self.session.flush()

    # -- reservations (run inside the caller's transaction) -----------------

    def reserve(self, room_id: UUID) -> RoomStatus:
        """Re-derive status after a reservation for the room was stored."""
        return self.refresh_status(self._get_room(room_id))

    def release_reservation(self, room_id: UUID) -> Optional[RoomStatus]:
        """Re-derive status after a reservation was removed, if still RESERVED."""
        room = self.session.get(Room, room_id)
        if room is None or room.status != RoomStatus.RESERVED.value:
            return None
        return self.refresh_status(room)
