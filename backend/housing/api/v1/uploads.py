"""API endpoints for employee photos and room / maintenance images."""

from __future__ import annotations

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlmodel import select

from housing.api.deps import ADMINS, HR, MAINTENANCE, MANAGER, SUPERVISOR, require_roles
from housing.db import SessionDep
from housing.models import Employee, MaintenanceRequest, Room, Upload
from housing.schemas import ApiResponse, UploadRead
from housing.services.uploads import delete_upload, discard_files, store_image, upload_url

logger = logging.getLogger(__name__)

router = APIRouter()


def _upload_read(upload: Upload) -> UploadRead:
    return UploadRead.model_validate({**upload.model_dump(), "url": upload_url(upload)})


async def _store_all(session: SessionDep, files: List[UploadFile], **owner: UUID) -> List[Upload]:
    uploads = []
    try:
        for file in files:
            content = await file.read()
            uploads.append(
                store_image(
                    session,
                    content,
                    file.filename or "upload",
                    file.content_type or "application/octet-stream",
                    **owner,
                )
            )
        session.commit()
    except Exception:
        discard_files(uploads)
        session.rollback()
        raise
    for upload in uploads:
        session.refresh(upload)
    return uploads


@router.post(
    "/employees/{employee_id}/photo",
    response_model=ApiResponse[UploadRead],
    status_code=status.HTTP_201_CREATED,
    summary="Upload employee photo",
    dependencies=[Depends(require_roles(*ADMINS, HR))],
)
async def upload_employee_photo(
    employee_id: UUID,
    session: SessionDep,
    file: UploadFile = File(...),
) -> ApiResponse[UploadRead]:
    """Store a photo for an employee, replacing the previous one."""
    if not session.get(Employee, employee_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employee not found")

    previous = session.exec(select(Upload).where(Upload.employee_id == employee_id)).first()
    if previous:
        delete_upload(session, previous)
        logger.info(f"Replacing photo of employee {employee_id}")

    (photo,) = await _store_all(session, [file], employee_id=employee_id)
    return ApiResponse.create(_upload_read(photo), code=status.HTTP_201_CREATED)


@router.post(
    "/rooms/{room_id}/images",
    response_model=ApiResponse[List[UploadRead]],
    status_code=status.HTTP_201_CREATED,
    summary="Upload room images",
    dependencies=[Depends(require_roles(*ADMINS, MANAGER, SUPERVISOR))],
)
async def upload_room_images(
    room_id: UUID,
    session: SessionDep,
    files: List[UploadFile] = File(...),
) -> ApiResponse[List[UploadRead]]:
    if not session.get(Room, room_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room not found")
    images = await _store_all(session, files, room_id=room_id)
    return ApiResponse.create([_upload_read(i) for i in images], code=status.HTTP_201_CREATED)


@router.post(
    "/maintenance/{request_id}/images",
    response_model=ApiResponse[List[UploadRead]],
    status_code=status.HTTP_201_CREATED,
    summary="Upload maintenance request images",
    dependencies=[Depends(require_roles(*ADMINS, MANAGER, SUPERVISOR, MAINTENANCE))],
)
async def upload_maintenance_images(
    request_id: UUID,
    session: SessionDep,
    files: List[UploadFile] = File(...),
) -> ApiResponse[List[UploadRead]]:
    if not session.get(MaintenanceRequest, request_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Maintenance request not found",
        )
    images = await _store_all(session, files, maintenance_request_id=request_id)
    return ApiResponse.create([_upload_read(i) for i in images], code=status.HTTP_201_CREATED)
