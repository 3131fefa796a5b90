from __future__ import annotations

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func
from sqlmodel import select

from housing.api.deps import ADMINS, MANAGER, SUPERVISOR, LedgerDep, require_roles
from housing.db import SessionDep
from housing.models import (
    Assignment,
    Building,
    Floor,
    MaintenanceRequest,
    Reservation,
    Room,
    RoomStatus,
    Upload,
)
from housing.schemas import ApiResponse, RoomCreate, RoomRead, RoomUpdate

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_roles(*ADMINS, MANAGER, SUPERVISOR))])


def _get_room_or_404(session: SessionDep, room_id: UUID) -> Room:
    room = session.get(Room, room_id)
    if not room:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room not found")
    return room


def _room_read(session: SessionDep, room: Room) -> RoomRead:
    read = RoomRead.model_validate(room)
    floor = session.get(Floor, room.floor_id)
    if floor:
        read.floor_number = floor.floor_number
        read.building_id = floor.building_id
        building = session.get(Building, floor.building_id)
        read.building_name = building.name if building else None
    return read


def _ensure_unique_number(
    session: SessionDep,
    floor_id: UUID,
    room_number: str,
    exclude: Optional[UUID] = None,
) -> None:
    statement = select(Room).where(Room.floor_id == floor_id, Room.room_number == room_number)
    if exclude is not None:
        statement = statement.where(Room.id != exclude)
    if session.exec(statement).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Room number already exists on this floor",
        )


@router.get("/", response_model=ApiResponse[List[RoomRead]], summary="List rooms")
def list_rooms(
    session: SessionDep,
    room_status: Optional[RoomStatus] = Query(default=None, alias="status"),
    floor_id: Optional[UUID] = Query(default=None),
    building_id: Optional[UUID] = Query(default=None),
) -> ApiResponse[List[RoomRead]]:
    statement = select(Room)
    if room_status:
        statement = statement.where(Room.status == room_status.value)
    if floor_id:
        statement = statement.where(Room.floor_id == floor_id)
    if building_id:
        statement = statement.join(Floor, Floor.id == Room.floor_id).where(
            Floor.building_id == building_id
        )
    rooms = session.exec(statement.order_by(Room.room_number)).all()
    return ApiResponse.create([_room_read(session, r) for r in rooms])


@router.post(
    "/",
    response_model=ApiResponse[RoomRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create room",
)
def create_room(payload: RoomCreate, session: SessionDep, ledger: LedgerDep) -> ApiResponse[RoomRead]:
    if not session.get(Floor, payload.floor_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Floor not found")
    _ensure_unique_number(session, payload.floor_id, payload.room_number)

    room = Room(
        floor_id=payload.floor_id,
        room_number=payload.room_number,
        capacity=payload.capacity,
        under_maintenance=payload.status == RoomStatus.MAINTENANCE.value,
    )
    with ledger.transaction():
        session.add(room)
        ledger.refresh_status(room)
    session.refresh(room)
    logger.info(f"Created room: {room.room_number}")
    return ApiResponse.create(_room_read(session, room), code=status.HTTP_201_CREATED)


@router.get("/{room_id}", response_model=ApiResponse[RoomRead], summary="Get room by id")
def get_room(room_id: UUID, session: SessionDep) -> ApiResponse[RoomRead]:
    return ApiResponse.create(_room_read(session, _get_room_or_404(session, room_id)))


@router.patch("/{room_id}", response_model=ApiResponse[RoomRead], summary="Update room")
def update_room(
    room_id: UUID,
    payload: RoomUpdate,
    session: SessionDep,
    ledger: LedgerDep,
) -> ApiResponse[RoomRead]:
    room = _get_room_or_404(session, room_id)
    update_data = payload.model_dump(exclude_unset=True)

    if update_data.get("room_number"):
        _ensure_unique_number(session, room.floor_id, update_data["room_number"], exclude=room.id)
        room.room_number = update_data["room_number"]
    if update_data.get("capacity") is not None:
        if update_data["capacity"] < room.current_occupancy:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Capacity cannot be lower than current occupancy",
            )
        room.capacity = update_data["capacity"]
    if update_data.get("status") is not None:
        # Only the maintenance flag is settable; the rest is derived
        room.under_maintenance = update_data["status"] == RoomStatus.MAINTENANCE.value

    with ledger.transaction():
        session.add(room)
        ledger.refresh_status(room)
    session.refresh(room)
    logger.info(f"Updated room: {room.room_number}")
    return ApiResponse.create(_room_read(session, room))


@router.delete("/{room_id}", response_model=ApiResponse[None], summary="Delete room")
def delete_room(room_id: UUID, session: SessionDep) -> ApiResponse[None]:
    room = _get_room_or_404(session, room_id)
    assignments_count = session.exec(
        select(func.count()).select_from(Assignment).where(Assignment.room_id == room.id)
    ).one()
    if assignments_count > 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete room with active or past assignments",
        )
    if room.current_occupancy > 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete an occupied room",
        )
    for model in (Reservation, MaintenanceRequest):
        count = session.exec(
            select(func.count()).select_from(model).where(model.room_id == room.id)
        ).one()
        if count > 0:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Cannot delete room with existing {model.__tablename__.replace('_', ' ')}",
            )

    for image in session.exec(select(Upload).where(Upload.room_id == room.id)).all():
        session.delete(image)
    session.delete(room)
    session.commit()
    logger.info(f"Deleted room: {room.room_number}")
    return ApiResponse.create(message="Room deleted successfully")
