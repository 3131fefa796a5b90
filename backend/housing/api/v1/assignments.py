from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import select

from housing.api.deps import ADMINS, HR, MANAGER, SUPERVISOR, LedgerDep, require_roles
from housing.db import SessionDep
from housing.models import Assignment, Employee, Room
from housing.schemas import (
    ApiResponse,
    AssignmentCreate,
    AssignmentRead,
    CheckoutRequest,
    ReassignRequest,
    ReassignResult,
)

router = APIRouter(
    dependencies=[Depends(require_roles(*ADMINS, HR, MANAGER, SUPERVISOR))],
)


def _assignment_read(session: SessionDep, assignment: Assignment) -> AssignmentRead:
    read = AssignmentRead.model_validate(assignment)
    employee = session.get(Employee, assignment.employee_id)
    if employee:
        read.employee_name = f"{employee.first_name} {employee.last_name}"
    room = session.get(Room, assignment.room_id)
    if room:
        read.room_number = room.room_number
    return read


@router.post(
    "/",
    response_model=ApiResponse[AssignmentRead],
    status_code=status.HTTP_201_CREATED,
    summary="Assign employee to room",
)
def create_assignment(
    payload: AssignmentCreate,
    session: SessionDep,
    ledger: LedgerDep,
) -> ApiResponse[AssignmentRead]:
    assignment = ledger.assign(
        payload.employee_id,
        payload.room_id,
        payload.check_in_date,
        payload.expected_check_out_date,
    )
    return ApiResponse.create(
        _assignment_read(session, assignment),
        message="Employee assigned successfully",
        code=status.HTTP_201_CREATED,
    )


@router.get("/", response_model=ApiResponse[List[AssignmentRead]], summary="List assignments")
def list_assignments(
    session: SessionDep,
    active: Optional[bool] = Query(default=None, description="Only open (true) or closed (false) stays"),
    employee_id: Optional[UUID] = Query(default=None),
    room_id: Optional[UUID] = Query(default=None),
) -> ApiResponse[List[AssignmentRead]]:
    statement = select(Assignment)
    if active is True:
        statement = statement.where(Assignment.check_out_date.is_(None))
    elif active is False:
        statement = statement.where(Assignment.check_out_date.is_not(None))
    if employee_id:
        statement = statement.where(Assignment.employee_id == employee_id)
    if room_id:
        statement = statement.where(Assignment.room_id == room_id)

    assignments = session.exec(statement.order_by(Assignment.check_in_date.desc())).all()
    return ApiResponse.create([_assignment_read(session, a) for a in assignments])


@router.patch(
    "/{assignment_id}/reassign",
    response_model=ApiResponse[ReassignResult],
    summary="Move employee to another room",
)
def reassign_employee(
    assignment_id: UUID,
    payload: ReassignRequest,
    session: SessionDep,
    ledger: LedgerDep,
) -> ApiResponse[ReassignResult]:
    result = ledger.reassign(assignment_id, payload.new_room_id)
    return ApiResponse.create(
        ReassignResult(
            old_assignment=_assignment_read(session, result.old_assignment),
            new_assignment=_assignment_read(session, result.new_assignment),
        ),
        message="Employee reassigned successfully",
    )


@router.patch(
    "/{assignment_id}/checkout",
    response_model=ApiResponse[AssignmentRead],
    summary="Check employee out",
)
def checkout_employee(
    assignment_id: UUID,
    session: SessionDep,
    ledger: LedgerDep,
    payload: Optional[CheckoutRequest] = None,
) -> ApiResponse[AssignmentRead]:
    check_out_date = payload.check_out_date if payload else None
    assignment = ledger.checkout(assignment_id, check_out_date)
    return ApiResponse.create(
        _assignment_read(session, assignment),
        message="Employee checked out successfully",
    )
