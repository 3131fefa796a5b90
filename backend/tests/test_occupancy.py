import logging
from datetime import datetime, timedelta
from uuid import uuid4

import pytest
from sqlmodel import Session, select

from housing.core.exceptions import BadRequestError, ConflictError, NotFoundError
from housing.models import Assignment, HostingStatus, Room, RoomStatus
from housing.repositories import InMemoryRepository
from housing.services.hostings import HostingService
from housing.services.occupancy import OccupancyLedger, derive_status
from housing.services.reservations import ReservationService

CHECK_IN = datetime(2026, 1, 5, 9, 0)


@pytest.fixture
def ledger(session):
    return OccupancyLedger(session)


def _reservation_data(room_id):
    return {
        "room_id": room_id,
        "first_name": "Omar",
        "last_name": "Nasser",
        "check_in_date": CHECK_IN + timedelta(days=10),
        "check_out_date": CHECK_IN + timedelta(days=12),
        "guest_id_card_number": "ID-778",
        "guest_phone": "+966500000000",
        "job_title": "Auditor",
        "department": "Finance",
    }


def _hosting_data(employee_id, guests):
    return {
        "employee_id": employee_id,
        "guest_first_name": "Ali",
        "guest_last_name": "Karim",
        "start_date": CHECK_IN,
        "end_date": CHECK_IN + timedelta(days=3),
        "guests": [{"name": f"Guest {i}"} for i in range(guests)],
    }


class TestDeriveStatus:
    def test_maintenance_wins(self):
        room = Room(floor_id=uuid4(), room_number="1", capacity=1, under_maintenance=True)
        assert derive_status(room, 1, 3) == RoomStatus.MAINTENANCE

    def test_full_room_is_occupied_even_when_reserved(self):
        room = Room(floor_id=uuid4(), room_number="1", capacity=2)
        assert derive_status(room, 2, 1) == RoomStatus.OCCUPIED

    def test_reserved_then_available(self):
        room = Room(floor_id=uuid4(), room_number="1", capacity=2)
        assert derive_status(room, 1, 1) == RoomStatus.RESERVED
        assert derive_status(room, 1, 0) == RoomStatus.AVAILABLE


def test_assign_and_checkout_round_trip(ledger, make_room, make_employee):
    room = make_room(capacity=1)
    employee = make_employee()

    assignment = ledger.assign(employee.id, room.id, CHECK_IN)
    assert room.current_occupancy == 1
    assert room.status == RoomStatus.OCCUPIED.value
    assert assignment.check_out_date is None

    closed = ledger.checkout(assignment.id)
    assert closed.check_out_date is not None
    assert room.current_occupancy == 0
    assert room.status == RoomStatus.AVAILABLE.value


def test_room_fills_up_then_rejects(ledger, make_room, make_employee):
    room = make_room(capacity=2)

    ledger.assign(make_employee().id, room.id, CHECK_IN)
    assert room.current_occupancy == 1
    assert room.status == RoomStatus.AVAILABLE.value

    ledger.assign(make_employee().id, room.id, CHECK_IN)
    assert room.current_occupancy == 2
    assert room.status == RoomStatus.OCCUPIED.value

    with pytest.raises(ConflictError, match="Room is already at full capacity"):
        ledger.assign(make_employee().id, room.id, CHECK_IN)
    assert room.current_occupancy == 2


def test_employee_cannot_hold_two_rooms(ledger, session, make_room, make_employee):
    room_a, room_b = make_room(), make_room()
    employee = make_employee()
    ledger.assign(employee.id, room_a.id, CHECK_IN)

    with pytest.raises(ConflictError, match="Employee is already assigned to a room"):
        ledger.assign(employee.id, room_b.id, CHECK_IN)

    assert room_b.current_occupancy == 0
    assert len(session.exec(select(Assignment)).all()) == 1


def test_assign_missing_employee_or_room(ledger, make_room, make_employee):
    with pytest.raises(NotFoundError, match="Employee not found"):
        ledger.assign(uuid4(), make_room().id, CHECK_IN)
    with pytest.raises(NotFoundError, match="Room not found"):
        ledger.assign(make_employee().id, uuid4(), CHECK_IN)


def test_second_checkout_fails(ledger, make_room, make_employee):
    room = make_room()
    assignment = ledger.assign(make_employee().id, room.id, CHECK_IN)
    ledger.checkout(assignment.id)

    with pytest.raises(NotFoundError, match="Active assignment not found"):
        ledger.checkout(assignment.id)
    assert room.current_occupancy == 0


def test_reassign_moves_occupant(ledger, make_room, make_employee):
    room_a = make_room(capacity=1)
    room_b = make_room(capacity=1)
    assignment = ledger.assign(make_employee().id, room_a.id, CHECK_IN)

    result = ledger.reassign(assignment.id, room_b.id)

    assert result.old_assignment.room_id == room_a.id
    assert result.new_assignment.room_id == room_b.id
    assert result.new_assignment.id == assignment.id
    assert (room_a.current_occupancy, room_a.status) == (0, RoomStatus.AVAILABLE.value)
    assert (room_b.current_occupancy, room_b.status) == (1, RoomStatus.OCCUPIED.value)


def test_reassign_into_partially_filled_room_keeps_it_available(ledger, make_room, make_employee):
    room_a = make_room(capacity=1)
    room_b = make_room(capacity=3)
    assignment = ledger.assign(make_employee().id, room_a.id, CHECK_IN)

    ledger.reassign(assignment.id, room_b.id)

    assert room_b.current_occupancy == 1
    assert room_b.status == RoomStatus.AVAILABLE.value


def test_reassign_failures(ledger, make_room, make_employee):
    room_a = make_room(capacity=1)
    full_room = make_room(capacity=1)
    assignment = ledger.assign(make_employee().id, room_a.id, CHECK_IN)
    ledger.assign(make_employee().id, full_room.id, CHECK_IN)

    with pytest.raises(ConflictError, match="New room is at full capacity"):
        ledger.reassign(assignment.id, full_room.id)
    with pytest.raises(NotFoundError, match="New room not found"):
        ledger.reassign(assignment.id, uuid4())
    with pytest.raises(BadRequestError, match="Employee is already in this room"):
        ledger.reassign(assignment.id, room_a.id)

    # Nothing moved
    assert room_a.current_occupancy == 1
    assert full_room.current_occupancy == 1

    ledger.checkout(assignment.id)
    with pytest.raises(NotFoundError, match="Active assignment not found"):
        ledger.reassign(assignment.id, make_room().id)


def test_vacated_room_under_maintenance_stays_in_maintenance(ledger, make_room, make_employee):
    room = make_room(capacity=2, under_maintenance=True)
    target = make_room(capacity=2)
    assignment = ledger.assign(make_employee().id, room.id, CHECK_IN)
    assert room.status == RoomStatus.MAINTENANCE.value

    ledger.reassign(assignment.id, target.id)
    assert room.current_occupancy == 0
    assert room.status == RoomStatus.MAINTENANCE.value


def test_reserved_room_returns_to_reserved_after_checkout(session, ledger, make_room, make_employee):
    room = make_room(capacity=1)
    reservations = ReservationService.for_session(session)
    reservations.create(_reservation_data(room.id))
    assert room.status == RoomStatus.RESERVED.value

    assignment = ledger.assign(make_employee().id, room.id, CHECK_IN)
    assert room.status == RoomStatus.OCCUPIED.value

    ledger.checkout(assignment.id)
    assert room.status == RoomStatus.RESERVED.value


def test_reservation_create_and_delete(session, make_room):
    room = make_room()
    service = ReservationService.for_session(session)

    first = service.create(_reservation_data(room.id))
    second = service.create(_reservation_data(room.id))
    assert room.status == RoomStatus.RESERVED.value

    service.delete(first.id)
    assert room.status == RoomStatus.RESERVED.value

    service.delete(second.id)
    assert room.status == RoomStatus.AVAILABLE.value


def test_reserving_an_occupied_room_keeps_it_occupied(session, ledger, make_room, make_employee):
    room = make_room(capacity=1)
    ledger.assign(make_employee().id, room.id, CHECK_IN)

    service = ReservationService.for_session(session)
    reservation = service.create(_reservation_data(room.id))
    assert room.status == RoomStatus.OCCUPIED.value

    service.delete(reservation.id)
    assert room.status == RoomStatus.OCCUPIED.value


def test_moving_a_reservation_releases_the_old_room(session, make_room):
    room_a, room_b = make_room(), make_room()
    service = ReservationService.for_session(session)
    reservation = service.create(_reservation_data(room_a.id))

    service.update(reservation.id, {"room_id": room_b.id})

    assert room_a.status == RoomStatus.AVAILABLE.value
    assert room_b.status == RoomStatus.RESERVED.value


def test_reservations_in_memory_repository(session, make_room):
    room = make_room()
    repository = InMemoryRepository()
    service = ReservationService(repository, OccupancyLedger(session, repository))

    reservation = service.create(_reservation_data(room.id))
    assert repository.count(room_id=room.id) == 1
    assert room.status == RoomStatus.RESERVED.value

    service.delete(reservation.id)
    assert repository.list() == []
    assert room.status == RoomStatus.AVAILABLE.value


def test_hosting_guests_count_until_completed(session, ledger, make_room, make_employee):
    room = make_room(capacity=3)
    host = make_employee()
    ledger.assign(host.id, room.id, CHECK_IN)
    service = HostingService.for_session(session)

    hosting = service.create(_hosting_data(host.id, guests=2))
    assert hosting.counted_room_id == room.id
    assert hosting.counted_guests == 2
    assert room.current_occupancy == 3
    # Guests never change the status
    assert room.status == RoomStatus.AVAILABLE.value

    service.update(hosting.id, {"status": HostingStatus.COMPLETED.value})
    assert room.current_occupancy == 1

    # Completing again is a no-op
    completed = service.update(hosting.id, {"status": HostingStatus.COMPLETED.value})
    assert completed.counted_guests == 0
    assert room.current_occupancy == 1


def test_hosting_guests_may_exceed_capacity(session, ledger, make_room, make_employee):
    room = make_room(capacity=1)
    host = make_employee()
    ledger.assign(host.id, room.id, CHECK_IN)

    HostingService.for_session(session).create(_hosting_data(host.id, guests=2))

    assert room.current_occupancy == 3
    assert room.current_occupancy > room.capacity


def test_hosting_without_room_counts_nothing(session, make_employee):
    host = make_employee()
    hosting = HostingService.for_session(session).create(_hosting_data(host.id, guests=2))
    assert hosting.counted_room_id is None
    assert hosting.counted_guests == 0


def test_deleting_active_hosting_releases_guests(session, ledger, make_room, make_employee):
    room = make_room(capacity=4)
    host = make_employee()
    ledger.assign(host.id, room.id, CHECK_IN)
    service = HostingService.for_session(session)
    hosting = service.create(_hosting_data(host.id, guests=2))

    service.delete(hosting.id)

    assert room.current_occupancy == 1
    with pytest.raises(NotFoundError, match="Hosting not found"):
        service.get(hosting.id)


def test_guests_are_removed_from_the_room_they_were_counted_in(session, ledger, make_room, make_employee):
    room_a = make_room(capacity=4)
    room_b = make_room(capacity=4)
    host = make_employee()
    assignment = ledger.assign(host.id, room_a.id, CHECK_IN)
    service = HostingService.for_session(session)
    hosting = service.create(_hosting_data(host.id, guests=2))

    ledger.reassign(assignment.id, room_b.id)
    service.update(hosting.id, {"status": HostingStatus.COMPLETED.value})

    assert room_a.current_occupancy == 0
    assert room_b.current_occupancy == 1


def test_failed_operation_rolls_back(ledger, session, make_room, make_employee):
    room = make_room(capacity=1)
    employee = make_employee()
    ledger.assign(employee.id, room.id, CHECK_IN)

    with pytest.raises(ConflictError):
        ledger.assign(make_employee().id, room.id, CHECK_IN)

    session.expire_all()
    assert room.current_occupancy == 1
    assert session.get(Room, room.id).status == RoomStatus.OCCUPIED.value


def test_concurrent_assign_of_same_employee_hits_unique_index(monkeypatch, ledger, session, make_room, make_employee):
    employee = make_employee()
    ledger.assign(employee.id, make_room().id, CHECK_IN)
    target = make_room()
    # Another request inserted its assignment after this one's check ran
    monkeypatch.setattr("housing.services.occupancy.find_active_assignment", lambda *args: None)

    with pytest.raises(ConflictError, match="Employee is already assigned to a room"):
        ledger.assign(employee.id, target.id, CHECK_IN)

    session.expire_all()
    assert session.get(Room, target.id).current_occupancy == 0
    active = session.exec(select(Assignment).where(Assignment.employee_id == employee.id)).all()
    assert len(active) == 1


def test_assign_with_stale_room_respects_capacity(engine, ledger, make_room, make_employee):
    room = make_room(capacity=1)
    late_employee = make_employee()

    with Session(engine) as other:
        stale_room = other.get(Room, room.id)
        assert stale_room.current_occupancy == 0

        ledger.assign(make_employee().id, room.id, CHECK_IN)

        with pytest.raises(ConflictError, match="Room is already at full capacity"):
            OccupancyLedger(other).assign(late_employee.id, room.id, CHECK_IN)

    assert room.current_occupancy == 1


def test_removing_occupants_reads_current_counts(ledger, session, make_room, make_employee, caplog):
    room = make_room(capacity=3)
    ledger.assign(make_employee().id, room.id, CHECK_IN)
    ledger._add_occupants(room.id, 1)

    with caplog.at_level(logging.WARNING, logger="housing.services.occupancy"):
        ledger._remove_occupants(room, 2)
    assert "clamping" not in caplog.text
    session.refresh(room)
    assert room.current_occupancy == 0

    with caplog.at_level(logging.WARNING, logger="housing.services.occupancy"):
        ledger._remove_occupants(room, 1)
    assert "clamping at 0" in caplog.text
    session.refresh(room)
    assert room.current_occupancy == 0


def test_timestamps_are_stored_as_naive_utc(engine, ledger, make_room, make_employee):
    before = datetime.utcnow()
    assignment = ledger.assign(make_employee().id, make_room().id, CHECK_IN)

    with Session(engine) as other:
        stored = other.get(Assignment, assignment.id)

    assert stored.created_at.tzinfo is None
    assert before <= stored.created_at <= datetime.utcnow()
