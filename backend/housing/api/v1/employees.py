from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import delete, func, or_
from sqlmodel import select

from housing.api.deps import ADMINS, HR, PaginationDep, require_roles
from housing.db import SessionDep
from housing.models import (
    Assignment,
    Employee,
    EmployeeStatus,
    Hosting,
    HostingStatus,
    Upload,
)
from housing.schemas import (
    ApiResponse,
    EmployeeCreate,
    EmployeeRead,
    EmployeeUpdate,
    PaginatedResponse,
)
from housing.services.occupancy import find_active_assignment
from housing.services.uploads import upload_url

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_roles(*ADMINS, HR))])


def _get_employee_or_404(session: SessionDep, employee_id: UUID) -> Employee:
    employee = session.get(Employee, employee_id)
    if not employee:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employee not found")
    return employee


def _to_read(session: SessionDep, employee: Employee) -> EmployeeRead:
    read = EmployeeRead.model_validate(employee)
    active = find_active_assignment(session, employee.id)
    read.current_room_id = active.room_id if active else None
    photo = session.exec(select(Upload).where(Upload.employee_id == employee.id)).first()
    read.photo_url = upload_url(photo) if photo else None
    return read


def _ensure_unique(
    session: SessionDep,
    employee_code: Optional[str],
    national_id: Optional[str],
    exclude: Optional[UUID] = None,
) -> None:
    conditions = []
    if employee_code:
        conditions.append(Employee.employee_code == employee_code)
    if national_id:
        conditions.append(Employee.national_id == national_id)
    if not conditions:
        return
    statement = select(Employee).where(or_(*conditions))
    if exclude is not None:
        statement = statement.where(Employee.id != exclude)
    if session.exec(statement).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Employee with this ID or National ID already exists",
        )


@router.get(
    "/",
    response_model=ApiResponse[PaginatedResponse[EmployeeRead]],
    summary="List employees",
)
def list_employees(
    session: SessionDep,
    pagination: PaginationDep,
    search: Optional[str] = Query(default=None, description="Name or employee code"),
    employee_status: Optional[EmployeeStatus] = Query(default=None, alias="status"),
    department: Optional[str] = Query(default=None),
) -> ApiResponse[PaginatedResponse[EmployeeRead]]:
    statement = select(Employee)
    if search:
        pattern = f"%{search}%"
        statement = statement.where(
            or_(
                Employee.first_name.ilike(pattern),
                Employee.last_name.ilike(pattern),
                Employee.employee_code.ilike(pattern),
            )
        )
    if employee_status:
        statement = statement.where(Employee.status == employee_status.value)
    if department:
        statement = statement.where(Employee.department == department)

    total = session.exec(select(func.count()).select_from(statement.subquery())).one()
    employees = session.exec(
        statement.order_by(Employee.last_name, Employee.first_name)
        .offset(pagination.skip)
        .limit(pagination.limit)
    ).all()

    return ApiResponse.create(
        PaginatedResponse.create(
            items=[_to_read(session, e) for e in employees],
            total=total,
            page=pagination.page,
            page_size=pagination.page_size,
        )
    )


@router.post(
    "/",
    response_model=ApiResponse[EmployeeRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create employee",
)
def create_employee(payload: EmployeeCreate, session: SessionDep) -> ApiResponse[EmployeeRead]:
    _ensure_unique(session, payload.employee_code, payload.national_id)
    employee = Employee(**payload.model_dump())
    session.add(employee)
    session.commit()
    session.refresh(employee)
    logger.info(
        f"Created employee: {employee.first_name} {employee.last_name} ({employee.employee_code})"
    )
    return ApiResponse.create(_to_read(session, employee), code=status.HTTP_201_CREATED)


@router.get("/{employee_id}", response_model=ApiResponse[EmployeeRead], summary="Get employee by id")
def get_employee(employee_id: UUID, session: SessionDep) -> ApiResponse[EmployeeRead]:
    return ApiResponse.create(_to_read(session, _get_employee_or_404(session, employee_id)))


@router.patch("/{employee_id}", response_model=ApiResponse[EmployeeRead], summary="Update employee")
def update_employee(
    employee_id: UUID,
    payload: EmployeeUpdate,
    session: SessionDep,
) -> ApiResponse[EmployeeRead]:
    employee = _get_employee_or_404(session, employee_id)
    update_data = payload.model_dump(exclude_unset=True)
    _ensure_unique(
        session,
        update_data.get("employee_code"),
        update_data.get("national_id"),
        exclude=employee.id,
    )

    for field, value in update_data.items():
        setattr(employee, field, value)
    employee.touch()

    session.add(employee)
    session.commit()
    session.refresh(employee)
    logger.info(
        f"Updated employee: {employee.first_name} {employee.last_name} ({employee.employee_code})"
    )
    return ApiResponse.create(_to_read(session, employee))


@router.delete("/{employee_id}", response_model=ApiResponse[None], summary="Delete employee")
def delete_employee(employee_id: UUID, session: SessionDep) -> ApiResponse[None]:
    employee = _get_employee_or_404(session, employee_id)
    if find_active_assignment(session, employee.id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete employee with an active assignment",
        )
    active_hosting = session.exec(
        select(Hosting).where(
            Hosting.employee_id == employee.id,
            Hosting.status == HostingStatus.ACTIVE.value,
        )
    ).first()
    if active_hosting:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete employee with an active hosting",
        )

    # Closed history goes with the employee
    session.exec(delete(Assignment).where(Assignment.employee_id == employee.id))
    session.exec(delete(Hosting).where(Hosting.employee_id == employee.id))
    session.exec(delete(Upload).where(Upload.employee_id == employee.id))
    session.delete(employee)
    session.commit()
    logger.info(
        f"Deleted employee: {employee.first_name} {employee.last_name} ({employee.employee_code})"
    )
    return ApiResponse.create(message="Employee deleted successfully")
