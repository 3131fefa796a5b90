from __future__ import annotations

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlmodel import select

from housing.api.deps import ADMINS, MANAGER, require_roles
from housing.api.v1.buildings import floor_read
from housing.db import SessionDep
from housing.models import Floor, Room
from housing.schemas import ApiResponse, FloorRead, FloorUpdate

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_roles(*ADMINS, MANAGER))])


def _get_floor_or_404(session: SessionDep, floor_id: UUID) -> Floor:
    floor = session.get(Floor, floor_id)
    if not floor:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Floor not found")
    return floor


@router.get("/", response_model=ApiResponse[List[FloorRead]], summary="List floors")
def list_floors(session: SessionDep) -> ApiResponse[List[FloorRead]]:
    floors = session.exec(select(Floor).order_by(Floor.building_id, Floor.floor_number)).all()
    return ApiResponse.create([floor_read(session, f) for f in floors])


@router.get("/{floor_id}", response_model=ApiResponse[FloorRead], summary="Get floor by id")
def get_floor(floor_id: UUID, session: SessionDep) -> ApiResponse[FloorRead]:
    return ApiResponse.create(floor_read(session, _get_floor_or_404(session, floor_id)))


@router.patch("/{floor_id}", response_model=ApiResponse[FloorRead], summary="Update floor")
def update_floor(floor_id: UUID, payload: FloorUpdate, session: SessionDep) -> ApiResponse[FloorRead]:
    floor = _get_floor_or_404(session, floor_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(floor, field, value)

    session.add(floor)
    session.commit()
    session.refresh(floor)
    logger.info(f"Updated floor {floor.floor_number} ({floor.id})")
    return ApiResponse.create(floor_read(session, floor))


@router.delete("/{floor_id}", response_model=ApiResponse[None], summary="Delete floor")
def delete_floor(floor_id: UUID, session: SessionDep) -> ApiResponse[None]:
    floor = _get_floor_or_404(session, floor_id)
    rooms_count = session.exec(
        select(func.count()).select_from(Room).where(Room.floor_id == floor.id)
    ).one()
    if rooms_count > 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete floor with rooms",
        )

    session.delete(floor)
    session.commit()
    logger.info(f"Deleted floor {floor.floor_number} ({floor.id})")
    return ApiResponse.create(message="Floor deleted successfully")
