"""Response schemas for user administration endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class UserOut(BaseModel):
    """User as returned to clients (no password)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: str
    full_name: str
    email: str
    role: str
    status: str
    created_at: datetime


class UserResponse(BaseModel):
    """Response for GET /users/{id}."""

    user: UserOut


class UsersListResponse(BaseModel):
    """Response for GET /users (admin only)."""

    users: list[UserOut]
    total: int


class StatusUpdateResponse(BaseModel):
    """Response for POST /users/{id}/{newStatus}."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_status_updated: bool
