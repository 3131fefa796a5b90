"""Nightly housekeeping tasks run by Celery beat."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from sqlmodel import Session

from housing.celery_app import celery_app
from housing.core.config import settings
from housing.db import engine
from housing.services.backup import BackupError, backup_database
from housing.services.system_settings import record_backup_time
from housing.services.uploads import remove_orphaned_uploads

logger = logging.getLogger(__name__)


@celery_app.task(name="housing.tasks.maintenance.backup_database_task")
def backup_database_task() -> dict:
    """Dump the database and remember when it happened."""
    logger.info("Running daily database backup")
    now = datetime.utcnow()
    try:
        target = backup_database(settings.DATABASE_URL, Path(settings.BACKUP_DIR), now)
    except BackupError as e:
        logger.error(f"Backup failed: {e}")
        return {"success": False, "error": str(e)}

    with Session(engine) as session:
        record_backup_time(session, now)
    return {"success": True, "file": str(target)}


@celery_app.task(name="housing.tasks.maintenance.cleanup_uploads_task")
def cleanup_uploads_task() -> dict[str, int]:
    """Delete upload files no database row refers to."""
    logger.info("Running daily cleanup of unused uploads")
    with Session(engine) as session:
        deleted = remove_orphaned_uploads(session, Path(settings.UPLOAD_DIR))
    return {"deleted": deleted}
