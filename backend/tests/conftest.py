import os
import tempfile
from datetime import datetime, timedelta
from itertools import count

# Settings are read once at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="housing-uploads-")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from housing.core.security import get_password_hash
from housing.db import enable_sqlite_foreign_keys, get_session
from housing.main import app
from housing.models import Building, Employee, Floor, Room, User, UserRole

ADMIN_PASSWORD = "admin-password"

_sequence = count(1)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def _create_user(session, username, role, password=ADMIN_PASSWORD, **fields):
    user = User(
        username=username,
        hashed_password=get_password_hash(password),
        role=role,
        **fields,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def admin_user(session):
    return _create_user(session, "admin", UserRole.SUPER_ADMIN.value, email="admin@example.com")


@pytest.fixture
def auth_headers(client, admin_user):
    response = client.post(
        "/api/v1/auth/login",
        json={"identifier": admin_user.username, "password": ADMIN_PASSWORD},
    )
    token = response.json()["data"]["tokens"]["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for(client, session):
    """Log in a fresh user with the given role and return its headers."""

    def _headers(role):
        user = _create_user(session, f"user{next(_sequence)}", role)
        response = client.post(
            "/api/v1/auth/login",
            json={"identifier": user.username, "password": ADMIN_PASSWORD},
        )
        return {"Authorization": f"Bearer {response.json()['data']['tokens']['access_token']}"}

    return _headers


@pytest.fixture
def floor(session):
    building = Building(name="Block A", location="North camp")
    session.add(building)
    session.commit()
    floor = Floor(building_id=building.id, floor_number="1")
    session.add(floor)
    session.commit()
    session.refresh(floor)
    return floor


@pytest.fixture
def make_room(session, floor):
    def _make_room(capacity=2, **fields):
        room = Room(
            floor_id=floor.id,
            room_number=fields.pop("room_number", f"R{next(_sequence)}"),
            capacity=capacity,
            **fields,
        )
        session.add(room)
        session.commit()
        session.refresh(room)
        return room

    return _make_room


@pytest.fixture
def make_employee(session):
    def _make_employee(**fields):
        n = next(_sequence)
        data = {
            "employee_code": f"EMP-{n:04d}",
            "first_name": "Sara",
            "last_name": f"Haddad{n}",
            "national_id": f"NID{n:06d}",
            "job_title": "Technician",
            "department": "Operations",
            "contract_end_date": datetime.utcnow() + timedelta(days=365),
        }
        data.update(fields)
        employee = Employee(**data)
        session.add(employee)
        session.commit()
        session.refresh(employee)
        return employee

    return _make_employee
