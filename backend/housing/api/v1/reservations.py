from __future__ import annotations

from typing import Annotated, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from housing.api.deps import ADMINS, MANAGER, SUPERVISOR, require_roles
from housing.db import SessionDep
from housing.schemas import (
    ApiResponse,
    ReservationCreate,
    ReservationRead,
    ReservationUpdate,
)
from housing.services.reservations import ReservationService

router = APIRouter(dependencies=[Depends(require_roles(*ADMINS, MANAGER, SUPERVISOR))])


def get_reservation_service(session: SessionDep) -> ReservationService:
    return ReservationService.for_session(session)


ReservationServiceDep = Annotated[ReservationService, Depends(get_reservation_service)]


@router.get("/", response_model=ApiResponse[List[ReservationRead]], summary="List reservations")
def list_reservations(
    service: ReservationServiceDep,
    room_id: Optional[UUID] = Query(default=None),
) -> ApiResponse[List[ReservationRead]]:
    filters = {"room_id": room_id} if room_id else {}
    return ApiResponse.create(
        [ReservationRead.model_validate(r) for r in service.list(**filters)]
    )


@router.post(
    "/",
    response_model=ApiResponse[ReservationRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create reservation",
)
def create_reservation(
    payload: ReservationCreate,
    service: ReservationServiceDep,
) -> ApiResponse[ReservationRead]:
    reservation = service.create(payload.model_dump())
    return ApiResponse.create(
        ReservationRead.model_validate(reservation), code=status.HTTP_201_CREATED
    )


@router.get(
    "/{reservation_id}",
    response_model=ApiResponse[ReservationRead],
    summary="Get reservation by id",
)
def get_reservation(reservation_id: UUID, service: ReservationServiceDep) -> ApiResponse[ReservationRead]:
    return ApiResponse.create(ReservationRead.model_validate(service.get(reservation_id)))


@router.patch(
    "/{reservation_id}",
    response_model=ApiResponse[ReservationRead],
    summary="Update reservation",
)
def update_reservation(
    reservation_id: UUID,
    payload: ReservationUpdate,
    service: ReservationServiceDep,
) -> ApiResponse[ReservationRead]:
    data = payload.model_dump(exclude_unset=True, exclude_none=True)
    reservation = service.update(reservation_id, data)
    return ApiResponse.create(ReservationRead.model_validate(reservation))


@router.delete(
    "/{reservation_id}",
    response_model=ApiResponse[None],
    summary="Delete reservation",
)
def delete_reservation(reservation_id: UUID, service: ReservationServiceDep) -> ApiResponse[None]:
    service.delete(reservation_id)
    return ApiResponse.create(message="Reservation deleted successfully")
