from datetime import datetime

from fastapi import status

from housing.models import UserRole
from housing.services.occupancy import OccupancyLedger

EMPLOYEES_URL = "/api/v1/employees/"

EMPLOYEE_DATA = {
    "employee_code": "EMP-9001",
    "first_name": "Yara",
    "last_name": "Mansour",
    "national_id": "NID-9001",
    "job_title": "Nurse",
    "department": "Clinic",
    "phone": "+966511111111",
    "contract_end_date": "2027-12-31T00:00:00",
}


def test_create_employee(client, auth_headers):
    response = client.post(EMPLOYEES_URL, json=EMPLOYEE_DATA, headers=auth_headers)

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()["data"]
    assert data["employee_code"] == "EMP-9001"
    assert data["status"] == "ACTIVE"
    assert data["current_room_id"] is None
    assert data["photo_url"] is None


def test_duplicate_employee_code_or_national_id(client, auth_headers):
    client.post(EMPLOYEES_URL, json=EMPLOYEE_DATA, headers=auth_headers)

    response = client.post(
        EMPLOYEES_URL,
        json={**EMPLOYEE_DATA, "employee_code": "EMP-9002"},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "Employee with this ID or National ID already exists"


def test_list_employees_paginated(client, auth_headers, make_employee):
    for _ in range(3):
        make_employee()

    response = client.get(EMPLOYEES_URL, params={"page": 1, "page_size": 2}, headers=auth_headers)

    page = response.json()["data"]
    assert page["total"] == 3
    assert page["total_pages"] == 2
    assert len(page["items"]) == 2

    second = client.get(EMPLOYEES_URL, params={"page": 2, "page_size": 2}, headers=auth_headers)
    assert len(second.json()["data"]["items"]) == 1


def test_invalid_page_size(client, auth_headers):
    response = client.get(EMPLOYEES_URL, params={"page_size": 500}, headers=auth_headers)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_search_and_filter(client, auth_headers, make_employee):
    make_employee(first_name="Karim", department="Security")
    make_employee(first_name="Huda", department="Kitchen", status="ON_LEAVE")

    found = client.get(EMPLOYEES_URL, params={"search": "kar"}, headers=auth_headers).json()["data"]
    assert [e["first_name"] for e in found["items"]] == ["Karim"]

    on_leave = client.get(EMPLOYEES_URL, params={"status": "ON_LEAVE"}, headers=auth_headers).json()["data"]
    assert [e["first_name"] for e in on_leave["items"]] == ["Huda"]

    kitchen = client.get(EMPLOYEES_URL, params={"department": "Kitchen"}, headers=auth_headers).json()["data"]
    assert kitchen["total"] == 1


def test_current_room_is_reported(client, session, auth_headers, make_room, make_employee):
    room = make_room()
    employee = make_employee()
    OccupancyLedger(session).assign(employee.id, room.id, datetime.utcnow())

    response = client.get(f"{EMPLOYEES_URL}{employee.id}", headers=auth_headers)
    assert response.json()["data"]["current_room_id"] == str(room.id)


def test_update_employee(client, auth_headers, make_employee):
    employee = make_employee()
    response = client.patch(
        f"{EMPLOYEES_URL}{employee.id}",
        json={"job_title": "Supervisor", "status": "TERMINATED"},
        headers=auth_headers,
    )
    data = response.json()["data"]
    assert data["job_title"] == "Supervisor"
    assert data["status"] == "TERMINATED"


def test_update_to_taken_code(client, auth_headers, make_employee):
    taken = make_employee()
    employee = make_employee()
    response = client.patch(
        f"{EMPLOYEES_URL}{employee.id}",
        json={"employee_code": taken.employee_code},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_cannot_delete_housed_employee(client, session, auth_headers, make_room, make_employee):
    employee = make_employee()
    OccupancyLedger(session).assign(employee.id, make_room().id, datetime.utcnow())

    response = client.delete(f"{EMPLOYEES_URL}{employee.id}", headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "Cannot delete employee with an active assignment"


def test_delete_employee_with_closed_history(client, session, auth_headers, make_room, make_employee):
    employee = make_employee()
    ledger = OccupancyLedger(session)
    assignment = ledger.assign(employee.id, make_room().id, datetime.utcnow())
    ledger.checkout(assignment.id)

    response = client.delete(f"{EMPLOYEES_URL}{employee.id}", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK

    assert client.get(f"{EMPLOYEES_URL}{employee.id}", headers=auth_headers).status_code == 404


def test_manager_cannot_manage_employees(client, headers_for):
    response = client.get(EMPLOYEES_URL, headers=headers_for(UserRole.MANAGER.value))
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_hr_can_manage_employees(client, headers_for):
    response = client.post(EMPLOYEES_URL, json=EMPLOYEE_DATA, headers=headers_for(UserRole.HR.value))
    assert response.status_code == status.HTTP_201_CREATED
