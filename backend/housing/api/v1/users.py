from __future__ import annotations

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import delete, or_, update
from sqlmodel import select

from housing.api.deps import ADMINS, CurrentUser, require_roles
from housing.core.security import get_password_hash
from housing.db import SessionDep
from housing.models import ActivityLog, RefreshToken, User
from housing.schemas import ApiResponse, UserCreate, UserRead, UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_roles(*ADMINS))])


def _get_user_or_404(session: SessionDep, user_id: UUID) -> User:
    user = session.get(User, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


def _ensure_unique(session: SessionDep, username: str | None, email: str | None, exclude: UUID | None = None) -> None:
    conditions = []
    if username:
        conditions.append(User.username == username)
    if email:
        conditions.append(User.email == email)
    if not conditions:
        return
    statement = select(User).where(or_(*conditions))
    if exclude is not None:
        statement = statement.where(User.id != exclude)
    if session.exec(statement).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email or username already taken",
        )


@router.get("/", response_model=ApiResponse[List[UserRead]], summary="List users")
def list_users(session: SessionDep) -> ApiResponse[List[UserRead]]:
    users = session.exec(select(User).order_by(User.created_at.asc())).all()
    return ApiResponse.create([UserRead.model_validate(u) for u in users])


@router.post(
    "/",
    response_model=ApiResponse[UserRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
)
def create_user(payload: UserCreate, session: SessionDep, current_user: CurrentUser) -> ApiResponse[UserRead]:
    email = payload.email.lower() if payload.email else None
    _ensure_unique(session, payload.username, email)

    user = User(
        username=payload.username,
        email=email,
        hashed_password=get_password_hash(payload.password),
        role=payload.role,
        status=payload.status,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info(f"{current_user.username} created user {user.username}")
    return ApiResponse.create(UserRead.model_validate(user), code=status.HTTP_201_CREATED)


@router.get("/{user_id}", response_model=ApiResponse[UserRead], summary="Get user by id")
def get_user(user_id: UUID, session: SessionDep) -> ApiResponse[UserRead]:
    return ApiResponse.create(UserRead.model_validate(_get_user_or_404(session, user_id)))


@router.patch("/{user_id}", response_model=ApiResponse[UserRead], summary="Update user")
def update_user(
    user_id: UUID,
    payload: UserUpdate,
    session: SessionDep,
    current_user: CurrentUser,
) -> ApiResponse[UserRead]:
    user = _get_user_or_404(session, user_id)
    update_data = payload.model_dump(exclude_unset=True)

    if update_data.get("email"):
        update_data["email"] = update_data["email"].lower()
    _ensure_unique(session, update_data.get("username"), update_data.get("email"), exclude=user.id)

    password = update_data.pop("password", None)
    if password:
        user.hashed_password = get_password_hash(password)
    for field, value in update_data.items():
        setattr(user, field, value)

    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info(f"{current_user.username} updated user {user.username}")
    return ApiResponse.create(UserRead.model_validate(user))


@router.delete("/{user_id}", response_model=ApiResponse[None], summary="Delete user")
def delete_user(user_id: UUID, session: SessionDep, current_user: CurrentUser) -> ApiResponse[None]:
    user = _get_user_or_404(session, user_id)
    if user.id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot delete your own account",
        )

    # Activity entries keep the username, only the link is dropped
    session.exec(
        update(ActivityLog)
        .where(ActivityLog.user_id == user.id)
        .values(user_id=None)
        .execution_options(synchronize_session=False)
    )
    session.exec(delete(RefreshToken).where(RefreshToken.user_id == user.id))
    session.delete(user)
    session.commit()
    logger.info(f"{current_user.username} deleted user {user.username}")
    return ApiResponse.create(message="User deleted successfully")
