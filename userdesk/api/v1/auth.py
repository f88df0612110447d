"""Registration and login endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from userdesk.core.database import get_db
from userdesk.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from userdesk.schemas.users import UserOut
from userdesk.services import users as user_service

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """
    Create a regular, active account and return it with an access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    user, token = user_service.register(db, body.full_name, str(body.email), body.password)
    return AuthResponse(user=UserOut.model_validate(user), token=token)


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """Authenticate with email and password; returns the user and a JWT access token."""
    user, token = user_service.login(db, body.email, body.password)
    return AuthResponse(user=UserOut.model_validate(user), token=token)
