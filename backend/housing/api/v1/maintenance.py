from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import delete, func
from sqlmodel import select

from housing.api.deps import ADMINS, MAINTENANCE, MANAGER, SUPERVISOR, require_roles
from housing.db import SessionDep
from housing.models import MaintenanceRequest, MaintenanceStatus, Room, Upload
from housing.schemas import (
    ApiResponse,
    MaintenanceRequestCreate,
    MaintenanceRequestRead,
    MaintenanceRequestUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    dependencies=[Depends(require_roles(*ADMINS, MANAGER, SUPERVISOR, MAINTENANCE))],
)


def _get_request_or_404(session: SessionDep, request_id: UUID) -> MaintenanceRequest:
    request = session.get(MaintenanceRequest, request_id)
    if not request:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Maintenance request not found",
        )
    return request


def _request_read(session: SessionDep, request: MaintenanceRequest) -> MaintenanceRequestRead:
    read = MaintenanceRequestRead.model_validate(request)
    room = session.get(Room, request.room_id)
    read.room_number = room.room_number if room else None
    read.images_count = session.exec(
        select(func.count()).select_from(Upload).where(Upload.maintenance_request_id == request.id)
    ).one()
    return read


@router.get(
    "/",
    response_model=ApiResponse[List[MaintenanceRequestRead]],
    summary="List maintenance requests",
)
def list_requests(
    session: SessionDep,
    request_status: Optional[MaintenanceStatus] = Query(default=None, alias="status"),
    room_id: Optional[UUID] = Query(default=None),
) -> ApiResponse[List[MaintenanceRequestRead]]:
    statement = select(MaintenanceRequest)
    if request_status:
        statement = statement.where(MaintenanceRequest.status == request_status.value)
    if room_id:
        statement = statement.where(MaintenanceRequest.room_id == room_id)
    requests = session.exec(statement.order_by(MaintenanceRequest.reported_at.desc())).all()
    return ApiResponse.create([_request_read(session, r) for r in requests])


@router.post(
    "/",
    response_model=ApiResponse[MaintenanceRequestRead],
    status_code=status.HTTP_201_CREATED,
    summary="Report a problem",
)
def create_request(
    payload: MaintenanceRequestCreate,
    session: SessionDep,
) -> ApiResponse[MaintenanceRequestRead]:
    if not session.get(Room, payload.room_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room not found")

    request = MaintenanceRequest(**payload.model_dump())
    session.add(request)
    session.commit()
    session.refresh(request)
    logger.info(f"Created maintenance request for room {payload.room_id}")
    return ApiResponse.create(_request_read(session, request), code=status.HTTP_201_CREATED)


@router.get(
    "/{request_id}",
    response_model=ApiResponse[MaintenanceRequestRead],
    summary="Get maintenance request by id",
)
def get_request(request_id: UUID, session: SessionDep) -> ApiResponse[MaintenanceRequestRead]:
    return ApiResponse.create(_request_read(session, _get_request_or_404(session, request_id)))


@router.patch(
    "/{request_id}",
    response_model=ApiResponse[MaintenanceRequestRead],
    summary="Update maintenance request",
)
def update_request(
    request_id: UUID,
    payload: MaintenanceRequestUpdate,
    session: SessionDep,
) -> ApiResponse[MaintenanceRequestRead]:
    request = _get_request_or_404(session, request_id)
    update_data = payload.model_dump(exclude_unset=True)

    new_status = update_data.get("status")
    if new_status == MaintenanceStatus.RESOLVED.value and request.status != new_status:
        request.resolved_at = datetime.utcnow()
    elif new_status and new_status != MaintenanceStatus.RESOLVED.value:
        request.resolved_at = None

    for field, value in update_data.items():
        setattr(request, field, value)
    request.touch()

    session.add(request)
    session.commit()
    session.refresh(request)
    logger.info(f"Updated maintenance request {request_id}")
    return ApiResponse.create(_request_read(session, request))


@router.delete(
    "/{request_id}",
    response_model=ApiResponse[None],
    summary="Delete maintenance request",
)
def delete_request(request_id: UUID, session: SessionDep) -> ApiResponse[None]:
    request = _get_request_or_404(session, request_id)
    session.exec(delete(Upload).where(Upload.maintenance_request_id == request.id))
    session.delete(request)
    session.commit()
    logger.info(f"Deleted maintenance request {request_id}")
    return ApiResponse.create(message="Maintenance request deleted successfully")
