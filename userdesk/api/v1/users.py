"""User administration endpoints (list, fetch, block/unblock). All require a bearer token."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from userdesk.api.deps import get_current_user, valid_user_id
from userdesk.core.database import get_db
from userdesk.schemas.auth import CurrentUser
from userdesk.schemas.users import (
    StatusUpdateResponse,
    UserOut,
    UserResponse,
    UsersListResponse,
)
from userdesk.services import users as user_service

router = APIRouter()


@router.get("", response_model=UsersListResponse)
def list_users(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    skip: Annotated[int, Query()] = 0,
    limit: Annotated[int | None, Query()] = None,
) -> UsersListResponse:
    """List users in creation order (admin only)."""
    users, total = user_service.list_users(db, current_user, skip=skip, limit=limit)
    return UsersListResponse(
        users=[UserOut.model_validate(u) for u in users],
        total=total,
    )


@router.get("/{id}", response_model=UserResponse)
def get_user(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    user_id: Annotated[str, Depends(valid_user_id)],
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """Fetch one user: your own record, or any record if you are an admin."""
    user = user_service.get_user(db, current_user, user_id)
    return UserResponse(user=UserOut.model_validate(user))


@router.post("/{id}/{new_status}", response_model=StatusUpdateResponse)
def change_status(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    user_id: Annotated[str, Depends(valid_user_id)],
    new_status: str,
    db: Annotated[Session, Depends(get_db)],
) -> StatusUpdateResponse:
    """Block (inactive) or unblock (active) a user: yourself, or anyone if you are an admin."""
    updated = user_service.change_status(db, current_user, user_id, new_status)
    return StatusUpdateResponse(is_status_updated=updated)
