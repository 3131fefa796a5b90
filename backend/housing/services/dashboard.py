from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta
from typing import Optional

from sqlmodel import Session, select

from housing.models import (
    Assignment,
    Building,
    Employee,
    EmployeeStatus,
    Floor,
    MaintenanceRequest,
    MaintenanceStatus,
    Room,
    RoomStatus,
    User,
)
from housing.schemas.dashboard import (
    BuildingOccupancy,
    DashboardCharts,
    DashboardResponse,
    DashboardStats,
    ExpiringContract,
    NamedValue,
    OverdueMaintenance,
)

CONTRACT_EXPIRY_WINDOW = timedelta(days=30)

# Rooms counted as taken on the dashboard
TAKEN_STATUSES = (RoomStatus.OCCUPIED.value, RoomStatus.RESERVED.value)
OPEN_MAINTENANCE_STATUSES = (MaintenanceStatus.OPEN.value, MaintenanceStatus.IN_PROGRESS.value)


def _distribution(counter: Counter) -> list[NamedValue]:
    return [NamedValue(name=name, value=value) for name, value in sorted(counter.items())]


def build_dashboard(session: Session, now: Optional[datetime] = None) -> DashboardResponse:
    """Aggregate the counts and chart series shown on the dashboard."""
    now = now or datetime.utcnow()
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)

    employees = session.exec(select(Employee)).all()
    rooms = session.exec(select(Room)).all()
    buildings = session.exec(select(Building).order_by(Building.name)).all()
    floors = session.exec(select(Floor)).all()
    users = session.exec(select(User)).all()
    maintenance = session.exec(select(MaintenanceRequest)).all()
    housed_employee_ids = set(
        session.exec(
            select(Assignment.employee_id).where(Assignment.check_out_date.is_(None))
        ).all()
    )

    active_employees = [e for e in employees if e.status == EmployeeStatus.ACTIVE.value]
    taken_rooms = [r for r in rooms if r.status in TAKEN_STATUSES]
    available_rooms = [r for r in rooms if r.status == RoomStatus.AVAILABLE.value]

    expiring = [
        ExpiringContract(
            employee_id=e.id,
            full_name=f"{e.first_name} {e.last_name}",
            department=e.department,
            contract_end_date=e.contract_end_date,
        )
        for e in active_employees
        if e.contract_end_date <= today + CONTRACT_EXPIRY_WINDOW
    ]
    overdue = [
        OverdueMaintenance(
            request_id=m.id,
            room_id=m.room_id,
            problem_type=m.problem_type,
            status=m.status,
            due_date=m.due_date,
        )
        for m in maintenance
        if m.status != MaintenanceStatus.RESOLVED.value and m.due_date and m.due_date < today
    ]

    stats = DashboardStats(
        total_employees=len(employees),
        active_employees=len(active_employees),
        unhoused_employees=len([e for e in active_employees if e.id not in housed_employee_ids]),
        total_rooms=len(rooms),
        total_buildings=len(buildings),
        occupied_rooms=len(taken_rooms),
        available_rooms=len(available_rooms),
        occupancy_rate=round(len(taken_rooms) / len(rooms) * 100) if rooms else 0,
        open_maintenance=len([m for m in maintenance if m.status in OPEN_MAINTENANCE_STATUSES]),
        expiring_contracts=expiring,
        overdue_maintenance=overdue,
    )

    floor_to_building = {f.id: f.building_id for f in floors}
    occupancy_by_building = []
    for building in buildings:
        building_rooms = [r for r in rooms if floor_to_building.get(r.floor_id) == building.id]
        occupancy_by_building.append(
            BuildingOccupancy(
                name=building.name,
                occupancy=len([r for r in building_rooms if r.status in TAKEN_STATUSES]),
                total=len(building_rooms),
            )
        )

    charts = DashboardCharts(
        occupancy_by_building=occupancy_by_building,
        employee_distribution_by_department=_distribution(
            Counter(e.department for e in active_employees)
        ),
        user_role_distribution=_distribution(Counter(u.role for u in users)),
        maintenance_status_distribution=_distribution(Counter(m.status for m in maintenance)),
    )

    return DashboardResponse(generated_at=now, stats=stats, charts=charts)
