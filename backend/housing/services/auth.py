"""Login, refresh token rotation and logout."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from sqlalchemy import or_
from sqlmodel import Session, select

from housing.core.config import settings
from housing.core.exceptions import ForbiddenError, UnauthorizedError
from housing.core.security import (
    create_access_token,
    create_refresh_token,
    get_password_hash,
    verify_password,
    verify_token,
)
from housing.models import RefreshToken, User
from housing.schemas.user import TokenPair
from housing.services.activity_log import ActivityLogService

logger = logging.getLogger(__name__)


def find_user_by_identifier(session: Session, identifier: str) -> User | None:
    statement = select(User).where(
        or_(User.username == identifier, User.email == identifier.lower())
    )
    return session.exec(statement).first()


def issue_tokens(session: Session, user: User) -> TokenPair:
    """Create an access/refresh pair and store the refresh token row."""
    tokens = TokenPair(
        access_token=create_access_token(user.id, role=user.role),
        refresh_token=create_refresh_token(user.id),
    )
    session.add(
        RefreshToken(
            token=tokens.refresh_token,
            user_id=user.id,
            expires_at=datetime.utcnow() + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        )
    )
    return tokens


def login(session: Session, identifier: str, password: str) -> tuple[User, TokenPair]:
    activity = ActivityLogService.for_session(session)
    user = find_user_by_identifier(session, identifier)
    if not user or not verify_password(password, user.hashed_password):
        activity.record(identifier, "Failed login attempt: Invalid credentials")
        raise UnauthorizedError("Incorrect username or password")
    if not user.is_active:
        activity.record(user.username, "Failed login attempt: Account inactive")
        raise ForbiddenError("Your account is inactive")

    tokens = issue_tokens(session, user)
    activity.record(user.username, "User logged in successfully", commit=False)
    session.commit()
    session.refresh(user)
    logger.info(f"User {user.username} logged in")
    return user, tokens


def refresh(session: Session, token: str) -> TokenPair:
    """Rotate a refresh token: the presented row is deleted, a new pair stored."""
    row = session.exec(select(RefreshToken).where(RefreshToken.token == token)).first()
    if row is None or row.expires_at < datetime.utcnow():
        if row is not None:
            session.delete(row)
            session.commit()
        raise UnauthorizedError("Invalid or expired refresh token")

    try:
        payload = verify_token(token, token_type="refresh")
    except ValueError:
        raise UnauthorizedError("Invalid or expired refresh token") from None

    user = session.get(User, row.user_id)
    if user is None or str(user.id) != payload.get("sub"):
        raise UnauthorizedError("User not found")

    session.delete(row)
    tokens = issue_tokens(session, user)
    session.commit()
    return tokens


def logout(session: Session, token: str) -> None:
    row = session.exec(select(RefreshToken).where(RefreshToken.token == token)).first()
    if row is None:
        logger.warning("Logout attempt with invalid refresh token")
        return
    user = session.get(User, row.user_id)
    session.delete(row)
    if user is not None:
        ActivityLogService.for_session(session).record(user.username, "User logged out", commit=False)
    session.commit()


def change_password(session: Session, user: User, current_password: str, new_password: str) -> None:
    if not verify_password(current_password, user.hashed_password):
        raise UnauthorizedError("Incorrect current password")
    user.hashed_password = get_password_hash(new_password)
    session.add(user)
    session.commit()
    logger.info(f"User changed their password: {user.username}")
