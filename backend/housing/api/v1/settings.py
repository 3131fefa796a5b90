from __future__ import annotations

from fastapi import APIRouter, Depends

from housing.api.deps import ADMINS, CurrentUser, require_roles
from housing.db import SessionDep
from housing.schemas import ApiResponse, SystemSettings, SystemSettingsUpdate
from housing.services.system_settings import get_system_settings, update_system_settings

router = APIRouter()


@router.get("/", response_model=ApiResponse[SystemSettings], summary="Get system settings")
def read_settings(session: SessionDep, current_user: CurrentUser) -> ApiResponse[SystemSettings]:
    return ApiResponse.create(get_system_settings(session))


@router.patch(
    "/",
    response_model=ApiResponse[SystemSettings],
    summary="Update system settings",
    dependencies=[Depends(require_roles(*ADMINS))],
)
def patch_settings(payload: SystemSettingsUpdate, session: SessionDep) -> ApiResponse[SystemSettings]:
    return ApiResponse.create(
        update_system_settings(session, payload),
        message="Settings updated successfully",
    )
