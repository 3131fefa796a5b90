from fastapi import status

from housing.models import UserRole

BUILDINGS_URL = "/api/v1/buildings/"


def _create_building(client, headers, name="Block B"):
    response = client.post(BUILDINGS_URL, json={"name": name, "location": "South camp"}, headers=headers)
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()["data"]


def test_create_and_list_buildings(client, auth_headers):
    created = _create_building(client, auth_headers)
    assert created["status"] == "ACTIVE"
    assert created["floors"] == []

    response = client.get(BUILDINGS_URL, headers=auth_headers)
    assert [b["name"] for b in response.json()["data"]] == ["Block B"]


def test_update_building(client, auth_headers):
    building = _create_building(client, auth_headers)
    response = client.patch(
        f"{BUILDINGS_URL}{building['id']}",
        json={"status": "INACTIVE"},
        headers=auth_headers,
    )
    assert response.json()["data"]["status"] == "INACTIVE"
    assert response.json()["data"]["name"] == "Block B"


def test_floors_of_a_building(client, auth_headers):
    building = _create_building(client, auth_headers)
    url = f"{BUILDINGS_URL}{building['id']}/floors"

    response = client.post(url, json={"floor_number": "G", "description": "Ground"}, headers=auth_headers)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["data"]["rooms_count"] == 0

    floors = client.get(url, headers=auth_headers).json()["data"]
    assert [f["floor_number"] for f in floors] == ["G"]

    detail = client.get(f"{BUILDINGS_URL}{building['id']}", headers=auth_headers).json()["data"]
    assert len(detail["floors"]) == 1


def test_delete_building_removes_empty_floors(client, auth_headers):
    building = _create_building(client, auth_headers)
    floor = client.post(
        f"{BUILDINGS_URL}{building['id']}/floors", json={"floor_number": "1"}, headers=auth_headers
    ).json()["data"]

    response = client.delete(f"{BUILDINGS_URL}{building['id']}", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK

    assert client.get(f"/api/v1/floors/{floor['id']}", headers=auth_headers).status_code == 404


def test_cannot_delete_building_with_rooms(client, auth_headers, floor, make_room):
    make_room()
    response = client.delete(f"{BUILDINGS_URL}{floor.building_id}", headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "Cannot delete building with rooms. Please delete rooms first."


def test_cannot_delete_floor_with_rooms(client, auth_headers, floor, make_room):
    make_room()
    response = client.delete(f"/api/v1/floors/{floor.id}", headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "Cannot delete floor with rooms"


def test_update_floor(client, auth_headers, floor):
    response = client.patch(
        f"/api/v1/floors/{floor.id}", json={"description": "Top floor"}, headers=auth_headers
    )
    assert response.json()["data"]["description"] == "Top floor"


def test_unknown_building(client, auth_headers):
    response = client.get(f"{BUILDINGS_URL}00000000-0000-0000-0000-000000000000", headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"code": 404, "message": "Building not found"}


def test_supervisor_cannot_manage_buildings(client, headers_for):
    response = client.post(
        BUILDINGS_URL, json={"name": "Block C"}, headers=headers_for(UserRole.SUPERVISOR.value)
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN
