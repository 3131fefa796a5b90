from __future__ import annotations

from typing import Annotated, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from housing.api.deps import ADMINS, MANAGER, SUPERVISOR, require_roles
from housing.db import SessionDep
from housing.models import HostingStatus
from housing.schemas import ApiResponse, HostingCreate, HostingRead, HostingUpdate
from housing.services.hostings import HostingService

router = APIRouter(dependencies=[Depends(require_roles(*ADMINS, MANAGER, SUPERVISOR))])


def get_hosting_service(session: SessionDep) -> HostingService:
    return HostingService.for_session(session)


HostingServiceDep = Annotated[HostingService, Depends(get_hosting_service)]


@router.get("/", response_model=ApiResponse[List[HostingRead]], summary="List hostings")
def list_hostings(
    service: HostingServiceDep,
    hosting_status: Optional[HostingStatus] = Query(default=None, alias="status"),
    employee_id: Optional[UUID] = Query(default=None),
) -> ApiResponse[List[HostingRead]]:
    filters = {}
    if hosting_status:
        filters["status"] = hosting_status.value
    if employee_id:
        filters["employee_id"] = employee_id
    return ApiResponse.create([HostingRead.model_validate(h) for h in service.list(**filters)])


@router.post(
    "/",
    response_model=ApiResponse[HostingRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create hosting",
)
def create_hosting(payload: HostingCreate, service: HostingServiceDep) -> ApiResponse[HostingRead]:
    hosting = service.create(payload.model_dump())
    return ApiResponse.create(HostingRead.model_validate(hosting), code=status.HTTP_201_CREATED)


@router.get("/{hosting_id}", response_model=ApiResponse[HostingRead], summary="Get hosting by id")
def get_hosting(hosting_id: UUID, service: HostingServiceDep) -> ApiResponse[HostingRead]:
    return ApiResponse.create(HostingRead.model_validate(service.get(hosting_id)))


@router.patch("/{hosting_id}", response_model=ApiResponse[HostingRead], summary="Update hosting")
def update_hosting(
    hosting_id: UUID,
    payload: HostingUpdate,
    service: HostingServiceDep,
) -> ApiResponse[HostingRead]:
    data = payload.model_dump(exclude_unset=True, exclude_none=True)
    hosting = service.update(hosting_id, data)
    return ApiResponse.create(HostingRead.model_validate(hosting))


@router.delete("/{hosting_id}", response_model=ApiResponse[None], summary="Delete hosting")
def delete_hosting(hosting_id: UUID, service: HostingServiceDep) -> ApiResponse[None]:
    service.delete(hosting_id)
    return ApiResponse.create(message="Hosting deleted successfully")
