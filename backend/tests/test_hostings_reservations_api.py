from datetime import datetime

from fastapi import status

from housing.services.occupancy import OccupancyLedger

HOSTINGS_URL = "/api/v1/hostings/"
RESERVATIONS_URL = "/api/v1/reservations/"


def _hosting_payload(employee_id, guests=2, **fields):
    payload = {
        "employee_id": str(employee_id),
        "guest_first_name": "Rami",
        "guest_last_name": "Aziz",
        "start_date": "2026-04-01T12:00:00",
        "end_date": "2026-04-04T12:00:00",
        "guests": [{"name": f"Guest {i}", "relation": "family"} for i in range(guests)],
    }
    payload.update(fields)
    return payload


def _reservation_payload(room_id, **fields):
    payload = {
        "room_id": str(room_id),
        "first_name": "Nour",
        "last_name": "Fares",
        "check_in_date": "2026-05-01T14:00:00",
        "check_out_date": "2026-05-03T10:00:00",
        "guest_id_card_number": "CARD-1",
        "guest_phone": "+966522222222",
        "job_title": "Consultant",
        "department": "IT",
    }
    payload.update(fields)
    return payload


def _room_state(session, room):
    session.refresh(room)
    return room.current_occupancy, room.status


def test_hosting_lifecycle(client, session, auth_headers, make_room, make_employee):
    room = make_room(capacity=4)
    host = make_employee()
    OccupancyLedger(session).assign(host.id, room.id, datetime.utcnow())

    response = client.post(HOSTINGS_URL, json=_hosting_payload(host.id), headers=auth_headers)
    assert response.status_code == status.HTTP_201_CREATED
    hosting = response.json()["data"]
    assert hosting["status"] == "ACTIVE"
    assert hosting["counted_guests"] == 2
    assert _room_state(session, room) == (3, "AVAILABLE")

    response = client.patch(
        f"{HOSTINGS_URL}{hosting['id']}", json={"status": "COMPLETED"}, headers=auth_headers
    )
    assert response.json()["data"]["status"] == "COMPLETED"
    assert _room_state(session, room) == (1, "AVAILABLE")

    response = client.delete(f"{HOSTINGS_URL}{hosting['id']}", headers=auth_headers)
    assert response.json()["message"] == "Hosting deleted successfully"
    assert _room_state(session, room) == (1, "AVAILABLE")


def test_hosting_for_unknown_employee(client, auth_headers):
    response = client.post(
        HOSTINGS_URL,
        json=_hosting_payload("00000000-0000-0000-0000-000000000000"),
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["message"] == "Employee not found"


def test_hosting_end_before_start(client, auth_headers, make_employee):
    response = client.post(
        HOSTINGS_URL,
        json=_hosting_payload(make_employee().id, end_date="2026-03-01T12:00:00"),
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "End date must be after start date"


def test_list_hostings_by_status(client, auth_headers, make_employee):
    host = make_employee()
    client.post(HOSTINGS_URL, json=_hosting_payload(host.id, guests=0), headers=auth_headers)
    client.post(
        HOSTINGS_URL,
        json=_hosting_payload(host.id, guests=0, status="COMPLETED"),
        headers=auth_headers,
    )

    active = client.get(HOSTINGS_URL, params={"status": "ACTIVE"}, headers=auth_headers).json()["data"]
    assert len(active) == 1
    everything = client.get(HOSTINGS_URL, params={"employee_id": str(host.id)}, headers=auth_headers)
    assert len(everything.json()["data"]) == 2


def test_reservation_lifecycle(client, session, auth_headers, make_room):
    room = make_room(capacity=2)

    response = client.post(RESERVATIONS_URL, json=_reservation_payload(room.id), headers=auth_headers)
    assert response.status_code == status.HTTP_201_CREATED
    reservation = response.json()["data"]
    assert _room_state(session, room) == (0, "RESERVED")

    listed = client.get(RESERVATIONS_URL, params={"room_id": str(room.id)}, headers=auth_headers)
    assert [r["id"] for r in listed.json()["data"]] == [reservation["id"]]

    response = client.delete(f"{RESERVATIONS_URL}{reservation['id']}", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    assert _room_state(session, room) == (0, "AVAILABLE")


def test_reservation_for_unknown_room(client, auth_headers):
    response = client.post(
        RESERVATIONS_URL,
        json=_reservation_payload("00000000-0000-0000-0000-000000000000"),
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["message"] == "Room not found"


def test_move_reservation(client, session, auth_headers, make_room):
    room_a, room_b = make_room(), make_room()
    reservation = client.post(
        RESERVATIONS_URL, json=_reservation_payload(room_a.id), headers=auth_headers
    ).json()["data"]

    response = client.patch(
        f"{RESERVATIONS_URL}{reservation['id']}",
        json={"room_id": str(room_b.id), "notes": "Late arrival"},
        headers=auth_headers,
    )
    assert response.json()["data"]["notes"] == "Late arrival"
    assert _room_state(session, room_a) == (0, "AVAILABLE")
    assert _room_state(session, room_b) == (0, "RESERVED")


def test_reservation_dates(client, auth_headers, make_room):
    response = client.post(
        RESERVATIONS_URL,
        json=_reservation_payload(make_room().id, check_out_date="2026-04-01T10:00:00"),
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "Check-out date must be after check-in date"
