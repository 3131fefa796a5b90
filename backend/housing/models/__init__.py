from .activity_log import ActivityLog
from .assignment import Assignment
from .building import Building, BuildingStatus
from .employee import Employee, EmployeeStatus
from .floor import Floor
from .hosting import Hosting, HostingStatus
from .maintenance_request import MaintenanceRequest, MaintenanceStatus
from .refresh_token import RefreshToken
from .reservation import Reservation
from .room import Room, RoomStatus
from .system_variable import SystemVariable
from .upload import Upload
from .user import User, UserRole, UserStatus

__all__ = [
    "ActivityLog",
    "Assignment",
    "Building",
    "BuildingStatus",
    "Employee",
    "EmployeeStatus",
    "Floor",
    "Hosting",
    "HostingStatus",
    "MaintenanceRequest",
    "MaintenanceStatus",
    "RefreshToken",
    "Reservation",
    "Room",
    "RoomStatus",
    "SystemVariable",
    "Upload",
    "User",
    "UserRole",
    "UserStatus",
]
