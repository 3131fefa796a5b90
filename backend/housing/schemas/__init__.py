from .activity_log import ActivityLogCreate, ActivityLogRead
from .assignment import (
    AssignmentCreate,
    AssignmentRead,
    CheckoutRequest,
    ReassignRequest,
    ReassignResult,
)
from .building import (
    BuildingCreate,
    BuildingRead,
    BuildingUpdate,
    FloorCreate,
    FloorRead,
    FloorUpdate,
)
from .common import ApiResponse, ErrorResponse
from .dashboard import DashboardResponse
from .employee import EmployeeCreate, EmployeeRead, EmployeeUpdate
from .hosting import HostingCreate, HostingRead, HostingUpdate
from .maintenance import (
    MaintenanceRequestCreate,
    MaintenanceRequestRead,
    MaintenanceRequestUpdate,
)
from .pagination import PaginatedResponse, PaginationParams
from .reservation import ReservationCreate, ReservationRead, ReservationUpdate
from .room import RoomCreate, RoomRead, RoomUpdate
from .settings import SystemSettings, SystemSettingsUpdate
from .upload import UploadRead
from .user import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResult,
    RefreshTokenRequest,
    TokenPair,
    UserCreate,
    UserRead,
    UserUpdate,
)

__all__ = [
    "ActivityLogCreate",
    "ActivityLogRead",
    "ApiResponse",
    "AssignmentCreate",
    "AssignmentRead",
    "BuildingCreate",
    "BuildingRead",
    "BuildingUpdate",
    "ChangePasswordRequest",
    "CheckoutRequest",
    "DashboardResponse",
    "EmployeeCreate",
    "EmployeeRead",
    "EmployeeUpdate",
    "ErrorResponse",
    "FloorCreate",
    "FloorRead",
    "FloorUpdate",
    "HostingCreate",
    "HostingRead",
    "HostingUpdate",
    "LoginRequest",
    "LoginResult",
    "MaintenanceRequestCreate",
    "MaintenanceRequestRead",
    "MaintenanceRequestUpdate",
    "PaginatedResponse",
    "PaginationParams",
    "ReassignRequest",
    "ReassignResult",
    "RefreshTokenRequest",
    "ReservationCreate",
    "ReservationRead",
    "ReservationUpdate",
    "RoomCreate",
    "RoomRead",
    "RoomUpdate",
    "SystemSettings",
    "SystemSettingsUpdate",
    "TokenPair",
    "UploadRead",
    "UserCreate",
    "UserRead",
    "UserUpdate",
]
