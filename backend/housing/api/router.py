from fastapi import APIRouter

from housing.api.v1 import (
    activity_log,
    assignments,
    auth,
    buildings,
    dashboard,
    employees,
    floors,
    health,
    hostings,
    maintenance,
    reservations,
    rooms,
    settings,
    uploads,
    users,
)

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(employees.router, prefix="/employees", tags=["employees"])
api_router.include_router(buildings.router, prefix="/buildings", tags=["buildings"])
api_router.include_router(floors.router, prefix="/floors", tags=["floors"])
api_router.include_router(rooms.router, prefix="/rooms", tags=["rooms"])
api_router.include_router(assignments.router, prefix="/assignments", tags=["assignments"])
api_router.include_router(hostings.router, prefix="/hostings", tags=["hostings"])
api_router.include_router(reservations.router, prefix="/reservations", tags=["reservations"])
api_router.include_router(maintenance.router, prefix="/maintenance", tags=["maintenance"])
api_router.include_router(uploads.router, prefix="/uploads", tags=["uploads"])
api_router.include_router(settings.router, prefix="/settings", tags=["settings"])
api_router.include_router(activity_log.router, prefix="/activity-log", tags=["activity-log"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
