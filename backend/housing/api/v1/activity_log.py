from __future__ import annotations

from fastapi import APIRouter, Depends, status

from housing.api.deps import ADMINS, ActivityLogDep, PaginationDep, require_roles
from housing.schemas import (
    ActivityLogCreate,
    ActivityLogRead,
    ApiResponse,
    PaginatedResponse,
)

router = APIRouter(dependencies=[Depends(require_roles(*ADMINS))])


@router.get(
    "/",
    response_model=ApiResponse[PaginatedResponse[ActivityLogRead]],
    summary="List activity log entries",
)
def list_activity(
    activity: ActivityLogDep,
    pagination: PaginationDep,
) -> ApiResponse[PaginatedResponse[ActivityLogRead]]:
    entries = activity.list()
    page = entries[pagination.skip : pagination.skip + pagination.limit]
    return ApiResponse.create(
        PaginatedResponse.create(
            items=[ActivityLogRead.model_validate(e) for e in page],
            total=len(entries),
            page=pagination.page,
            page_size=pagination.page_size,
        )
    )


@router.post(
    "/",
    response_model=ApiResponse[ActivityLogRead],
    status_code=status.HTTP_201_CREATED,
    summary="Add activity log entry",
)
def create_activity(payload: ActivityLogCreate, activity: ActivityLogDep) -> ApiResponse[ActivityLogRead]:
    entry = activity.record(payload.username, payload.action)
    return ApiResponse.create(ActivityLogRead.model_validate(entry), code=status.HTTP_201_CREATED)
