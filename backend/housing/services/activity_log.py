from __future__ import annotations

import logging
from typing import List, Optional

from sqlmodel import Session, select

from housing.models import ActivityLog, User
from housing.repositories import Repository, SqlRepository

logger = logging.getLogger(__name__)


class ActivityLogService:
    """Audit trail of user-visible actions (logins, logouts, manual entries)."""

    def __init__(self, repository: Repository[ActivityLog], session: Optional[Session] = None) -> None:
        self.repository = repository
        # Only used to link entries to known users
        self.session = session

    @classmethod
    def for_session(cls, session: Session) -> ActivityLogService:
        repository = SqlRepository(session, ActivityLog, order_by=ActivityLog.timestamp.desc())
        return cls(repository, session)

    def _resolve_user_id(self, username: str):
        if self.session is None:
            return None
        user = self.session.exec(select(User).where(User.username == username)).first()
        return user.id if user else None

    def record(self, username: str, action: str, commit: bool = True) -> ActivityLog:
        entry = ActivityLog(
            username=username,
            action=action,
            user_id=self._resolve_user_id(username),
        )
        self.repository.insert(entry)
        if commit and self.session is not None:
            self.session.commit()
            self.session.refresh(entry)
        logger.info(f"Activity logged: [{username}] {action}")
        return entry

    def list(self) -> List[ActivityLog]:
        return self.repository.list()
