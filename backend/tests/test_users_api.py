from fastapi import status
from sqlmodel import select

from housing.models import ActivityLog, UserRole

USERS_URL = "/api/v1/users/"


def test_create_user(client, auth_headers):
    response = client.post(
        USERS_URL,
        json={"username": "hr.lead", "email": "HR@Example.com", "password": "secret-pass", "role": "HR"},
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()["data"]
    assert data["email"] == "hr@example.com"
    assert data["role"] == "HR"
    assert data["status"] == "ACTIVE"

    login = client.post("/api/v1/auth/login", json={"identifier": "hr.lead", "password": "secret-pass"})
    assert login.status_code == status.HTTP_200_OK


def test_duplicate_username(client, auth_headers):
    response = client.post(
        USERS_URL,
        json={"username": "admin", "password": "secret-pass"},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "Email or username already taken"


def test_invalid_role(client, auth_headers):
    response = client.post(
        USERS_URL,
        json={"username": "someone", "password": "secret-pass", "role": "JANITOR"},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_update_user(client, auth_headers):
    user = client.post(
        USERS_URL, json={"username": "viewer1", "password": "secret-pass"}, headers=auth_headers
    ).json()["data"]

    response = client.patch(
        f"{USERS_URL}{user['id']}",
        json={"role": "MANAGER", "status": "INACTIVE"},
        headers=auth_headers,
    )
    assert response.json()["data"]["role"] == "MANAGER"
    assert response.json()["data"]["status"] == "INACTIVE"

    login = client.post("/api/v1/auth/login", json={"identifier": "viewer1", "password": "secret-pass"})
    assert login.status_code == status.HTTP_403_FORBIDDEN


def test_cannot_delete_self(client, auth_headers, admin_user):
    response = client.delete(f"{USERS_URL}{admin_user.id}", headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "You cannot delete your own account"


def test_delete_user_keeps_activity_entries(client, session, auth_headers):
    client.post(USERS_URL, json={"username": "leaver", "password": "secret-pass"}, headers=auth_headers)
    client.post("/api/v1/auth/login", json={"identifier": "leaver", "password": "secret-pass"})
    users = client.get(USERS_URL, headers=auth_headers).json()["data"]
    leaver_id = next(u["id"] for u in users if u["username"] == "leaver")

    response = client.delete(f"{USERS_URL}{leaver_id}", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK

    entries = session.exec(select(ActivityLog).where(ActivityLog.username == "leaver")).all()
    assert len(entries) == 1
    assert entries[0].user_id is None


def test_users_require_admin(client, headers_for):
    response = client.get(USERS_URL, headers=headers_for(UserRole.HR.value))
    assert response.status_code == status.HTTP_403_FORBIDDEN
