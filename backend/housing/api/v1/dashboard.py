from __future__ import annotations

from fastapi import APIRouter

from housing.api.deps import CurrentUser
from housing.db import SessionDep
from housing.schemas import ApiResponse, DashboardResponse
from housing.services.dashboard import build_dashboard

router = APIRouter()


@router.get("/stats", response_model=ApiResponse[DashboardResponse], summary="Dashboard statistics")
def read_dashboard(session: SessionDep, current_user: CurrentUser) -> ApiResponse[DashboardResponse]:
    """Counts and chart series for the landing page."""
    return ApiResponse.create(build_dashboard(session))
