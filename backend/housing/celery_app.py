"""Celery application configuration."""

from __future__ import annotations

import logging

from celery import Celery
from celery.schedules import crontab

from housing.core.config import settings

logger = logging.getLogger(__name__)

celery_app = Celery(
    "housing",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["housing.tasks.maintenance"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    broker_connection_retry_on_startup=True,
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    result_expires=3600,
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=500,
)

# Periodic tasks
celery_app.conf.beat_schedule = {
    "backup-database": {
        "task": "housing.tasks.maintenance.backup_database_task",
        "schedule": crontab(hour=2, minute=0),
    },
    "cleanup-uploads": {
        "task": "housing.tasks.maintenance.cleanup_uploads_task",
        "schedule": crontab(hour=3, minute=0),
    },
}

logger.info(f"Celery app configured with broker: {settings.CELERY_BROKER_URL}")
