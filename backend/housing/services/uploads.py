from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional
from uuid import UUID, uuid4

from sqlmodel import Session, select

from housing.core.config import settings
from housing.core.exceptions import BadRequestError
from housing.models import Upload

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


def get_upload_dir() -> Path:
    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    return upload_dir


def upload_url(upload: Upload) -> str:
    return f"/uploads/{upload.filename}"


def store_image(
    session: Session,
    content: bytes,
    original_filename: str,
    content_type: str,
    *,
    employee_id: Optional[UUID] = None,
    room_id: Optional[UUID] = None,
    maintenance_request_id: Optional[UUID] = None,
) -> Upload:
    """Write an image to the upload directory and record it. Does not commit."""
    extension = Path(original_filename).suffix.lower()
    if extension not in ALLOWED_EXTENSIONS:
        raise BadRequestError(
            f"File type not allowed. Allowed types: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
        )
    if not content:
        raise BadRequestError("No file uploaded")
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise BadRequestError(
            f"File size exceeds maximum allowed size of "
            f"{settings.MAX_UPLOAD_SIZE / (1024 * 1024):.0f} MB"
        )

    filename = f"{uuid4().hex}{extension}"
    file_path = get_upload_dir() / filename

    upload = Upload(
        filename=filename,
        original_filename=original_filename,
        path=str(file_path),
        content_type=content_type,
        size=len(content),
        employee_id=employee_id,
        room_id=room_id,
        maintenance_request_id=maintenance_request_id,
    )
    session.add(upload)
    session.flush()
    file_path.write_bytes(content)
    logger.info(f"Stored upload {filename} ({len(content)} bytes)")
    return upload


def discard_files(uploads: List[Upload]) -> None:
    """Remove the files of uploads whose rows were rolled back."""
    for upload in uploads:
        Path(upload.path).unlink(missing_ok=True)


def delete_upload(session: Session, upload: Upload) -> None:
    """Drop the row; the file is left for the cleanup job."""
    session.delete(upload)
    session.flush()


def remove_orphaned_uploads(session: Session, upload_dir: Path) -> int:
    """Delete files in ``upload_dir`` that no Upload row references."""
    if not upload_dir.exists():
        return 0
    known = set(session.exec(select(Upload.filename)).all())
    deleted = 0
    for path in upload_dir.iterdir():
        if path.is_file() and path.name not in known:
            path.unlink()
            deleted += 1
    if deleted:
        logger.info(f"Cleanup deleted {deleted} unused upload(s)")
    else:
        logger.info("Cleanup ran, no unused uploads found")
    return deleted
