from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel


class NamedValue(BaseModel):
    name: str
    value: int


class BuildingOccupancy(BaseModel):
    name: str
    occupancy: int
    total: int


class ExpiringContract(BaseModel):
    employee_id: UUID
    full_name: str
    department: str
    contract_end_date: datetime


class OverdueMaintenance(BaseModel):
    request_id: UUID
    room_id: UUID
    problem_type: str
    status: str
    due_date: Optional[datetime] = None


class DashboardStats(BaseModel):
    total_employees: int = 0
    active_employees: int = 0
    unhoused_employees: int = 0
    total_rooms: int = 0
    total_buildings: int = 0
    occupied_rooms: int = 0
    available_rooms: int = 0
    occupancy_rate: int = 0
    open_maintenance: int = 0
    expiring_contracts: List[ExpiringContract] = []
    overdue_maintenance: List[OverdueMaintenance] = []


class DashboardCharts(BaseModel):
    occupancy_by_building: List[BuildingOccupancy] = []
    employee_distribution_by_department: List[NamedValue] = []
    user_role_distribution: List[NamedValue] = []
    maintenance_status_distribution: List[NamedValue] = []


class DashboardResponse(BaseModel):
    generated_at: datetime
    stats: DashboardStats
    charts: DashboardCharts
