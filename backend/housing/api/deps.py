from __future__ import annotations

from typing import Annotated, Callable, Optional
from uuid import UUID

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import OAuth2PasswordBearer

from housing.core.config import settings
from housing.core.security import verify_token
from housing.db import SessionDep
from housing.models import User, UserRole
from housing.schemas import PaginationParams
from housing.services.activity_log import ActivityLogService
from housing.services.occupancy import OccupancyLedger

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/auth/login",
    auto_error=False,
)

SUPER_ADMIN = UserRole.SUPER_ADMIN.value
ADMIN = UserRole.ADMIN.value
MANAGER = UserRole.MANAGER.value
SUPERVISOR = UserRole.SUPERVISOR.value
HR = UserRole.HR.value
MAINTENANCE = UserRole.MAINTENANCE.value

ADMINS = (SUPER_ADMIN, ADMIN)


def _unauthenticated() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Please authenticate",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    session: SessionDep,
    token: Optional[str] = Depends(oauth2_scheme),
) -> User:
    if not token:
        raise _unauthenticated()
    try:
        payload = verify_token(token, token_type="access")
        user_id = UUID(payload.get("sub", ""))
    except ValueError:
        raise _unauthenticated() from None

    user = session.get(User, user_id)
    if not user or not user.is_active:
        raise _unauthenticated()
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


def require_roles(*roles: str) -> Callable[[User], User]:
    """Dependency factory allowing only users holding one of ``roles``."""

    def _check_role(current_user: CurrentUser) -> User:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Forbidden: You do not have the required role",
            )
        return current_user

    return _check_role


def get_ledger(session: SessionDep) -> OccupancyLedger:
    return OccupancyLedger(session)


LedgerDep = Annotated[OccupancyLedger, Depends(get_ledger)]


def get_activity_log(session: SessionDep) -> ActivityLogService:
    return ActivityLogService.for_session(session)


ActivityLogDep = Annotated[ActivityLogService, Depends(get_activity_log)]


def get_pagination(
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=50, ge=1, le=100),
) -> PaginationParams:
    return PaginationParams(page=page, page_size=page_size)


PaginationDep = Annotated[PaginationParams, Depends(get_pagination)]
