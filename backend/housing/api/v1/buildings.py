from __future__ import annotations

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import delete, func
from sqlmodel import select

from housing.api.deps import ADMINS, MANAGER, require_roles
from housing.db import SessionDep
from housing.models import Building, Floor, Room
from housing.schemas import (
    ApiResponse,
    BuildingCreate,
    BuildingRead,
    BuildingUpdate,
    FloorCreate,
    FloorRead,
)

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_roles(*ADMINS, MANAGER))])


def get_building_or_404(session: SessionDep, building_id: UUID) -> Building:
    building = session.get(Building, building_id)
    if not building:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Building not found")
    return building


def floor_read(session: SessionDep, floor: Floor) -> FloorRead:
    rooms_count = session.exec(
        select(func.count()).select_from(Room).where(Room.floor_id == floor.id)
    ).one()
    read = FloorRead.model_validate(floor)
    read.rooms_count = rooms_count
    return read


def _building_read(session: SessionDep, building: Building) -> BuildingRead:
    floors = session.exec(
        select(Floor).where(Floor.building_id == building.id).order_by(Floor.floor_number)
    ).all()
    read = BuildingRead.model_validate(building)
    read.floors = [floor_read(session, floor) for floor in floors]
    return read


@router.get("/", response_model=ApiResponse[List[BuildingRead]], summary="List buildings")
def list_buildings(session: SessionDep) -> ApiResponse[List[BuildingRead]]:
    buildings = session.exec(select(Building).order_by(Building.name)).all()
    return ApiResponse.create([_building_read(session, b) for b in buildings])


@router.post(
    "/",
    response_model=ApiResponse[BuildingRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create building",
)
def create_building(payload: BuildingCreate, session: SessionDep) -> ApiResponse[BuildingRead]:
    building = Building(**payload.model_dump())
    session.add(building)
    session.commit()
    session.refresh(building)
    logger.info(f"Created building: {building.name}")
    return ApiResponse.create(_building_read(session, building), code=status.HTTP_201_CREATED)


@router.get("/{building_id}", response_model=ApiResponse[BuildingRead], summary="Get building by id")
def get_building(building_id: UUID, session: SessionDep) -> ApiResponse[BuildingRead]:
    return ApiResponse.create(_building_read(session, get_building_or_404(session, building_id)))


@router.patch("/{building_id}", response_model=ApiResponse[BuildingRead], summary="Update building")
def update_building(
    building_id: UUID,
    payload: BuildingUpdate,
    session: SessionDep,
) -> ApiResponse[BuildingRead]:
    building = get_building_or_404(session, building_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(building, field, value)
    building.touch()

    session.add(building)
    session.commit()
    session.refresh(building)
    logger.info(f"Updated building: {building.name}")
    return ApiResponse.create(_building_read(session, building))


@router.delete("/{building_id}", response_model=ApiResponse[None], summary="Delete building")
def delete_building(building_id: UUID, session: SessionDep) -> ApiResponse[None]:
    building = get_building_or_404(session, building_id)
    rooms_count = session.exec(
        select(func.count())
        .select_from(Room)
        .join(Floor, Floor.id == Room.floor_id)
        .where(Floor.building_id == building.id)
    ).one()
    if rooms_count > 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete building with rooms. Please delete rooms first.",
        )

    session.exec(delete(Floor).where(Floor.building_id == building.id))
    session.delete(building)
    session.commit()
    logger.info(f"Deleted building: {building.name}")
    return ApiResponse.create(message="Building deleted successfully")


@router.get(
    "/{building_id}/floors",
    response_model=ApiResponse[List[FloorRead]],
    summary="List floors of a building",
)
def list_building_floors(building_id: UUID, session: SessionDep) -> ApiResponse[List[FloorRead]]:
    get_building_or_404(session, building_id)
    floors = session.exec(
        select(Floor).where(Floor.building_id == building_id).order_by(Floor.floor_number)
    ).all()
    return ApiResponse.create([floor_read(session, f) for f in floors])


@router.post(
    "/{building_id}/floors",
    response_model=ApiResponse[FloorRead],
    status_code=status.HTTP_201_CREATED,
    summary="Add floor to a building",
)
def create_floor(
    building_id: UUID,
    payload: FloorCreate,
    session: SessionDep,
) -> ApiResponse[FloorRead]:
    get_building_or_404(session, building_id)
    floor = Floor(building_id=building_id, **payload.model_dump())
    session.add(floor)
    session.commit()
    session.refresh(floor)
    logger.info(f"Created floor {floor.floor_number} in building {building_id}")
    return ApiResponse.create(floor_read(session, floor), code=status.HTTP_201_CREATED)
