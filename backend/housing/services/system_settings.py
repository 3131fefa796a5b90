"""Typed system settings stored as ``system_variables`` rows."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict

from sqlmodel import Session, select

from housing.models import SystemVariable
from housing.schemas.settings import SystemSettings, SystemSettingsUpdate

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE_KEY = "default_language"
AI_SUGGESTIONS_KEY = "ai_suggestions"
LAST_BACKUP_TIME_KEY = "last_backup_time"

DEFAULT_VARIABLES: Dict[str, str] = {
    DEFAULT_LANGUAGE_KEY: "en",
    AI_SUGGESTIONS_KEY: "false",
}


def _load_variables(session: Session) -> Dict[str, str]:
    rows = session.exec(select(SystemVariable)).all()
    return {row.key: row.value for row in rows}


def _to_settings(variables: Dict[str, str]) -> SystemSettings:
    values = {**DEFAULT_VARIABLES, **variables}
    last_backup = values.get(LAST_BACKUP_TIME_KEY)
    return SystemSettings(
        default_language=values[DEFAULT_LANGUAGE_KEY],
        ai_suggestions_enabled=values[AI_SUGGESTIONS_KEY] == "true",
        last_backup_time=datetime.fromisoformat(last_backup) if last_backup else None,
    )


def get_system_settings(session: Session) -> SystemSettings:
    return _to_settings(_load_variables(session))


def _upsert_variables(session: Session, variables: Dict[str, str]) -> None:
    existing = {
        row.key: row
        for row in session.exec(
            select(SystemVariable).where(SystemVariable.key.in_(list(variables)))
        ).all()
    }
    for key, value in variables.items():
        row = existing.get(key)
        if row is None:
            row = SystemVariable(key=key, value=value)
        else:
            row.value = value
        session.add(row)


def update_system_settings(session: Session, payload: SystemSettingsUpdate) -> SystemSettings:
    """Upsert every provided setting in one transaction."""
    variables: Dict[str, str] = {}
    if payload.default_language is not None:
        variables[DEFAULT_LANGUAGE_KEY] = payload.default_language
    if payload.ai_suggestions_enabled is not None:
        variables[AI_SUGGESTIONS_KEY] = "true" if payload.ai_suggestions_enabled else "false"

    try:
        _upsert_variables(session, variables)
        session.commit()
    except Exception:
        session.rollback()
        raise
    logger.info(f"Updated system settings: {sorted(variables)}")
    return get_system_settings(session)


def record_backup_time(session: Session, when: datetime) -> None:
    _upsert_variables(session, {LAST_BACKUP_TIME_KEY: when.isoformat()})
    session.commit()


def ensure_default_settings(session: Session) -> None:
    """Create missing default variables without touching existing values."""
    current = _load_variables(session)
    missing = {key: value for key, value in DEFAULT_VARIABLES.items() if key not in current}
    if missing:
        _upsert_variables(session, missing)
        session.commit()
        logger.info(f"Created default system variables: {sorted(missing)}")
