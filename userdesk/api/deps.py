"""Auth dependencies: bearer token gate and path id validation."""

import logging
from typing import Annotated

from fastapi import Depends, Path
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from userdesk.core.database import get_db
from userdesk.core.errors import Unauthenticated
from userdesk.core.security import ExpiredToken, InvalidToken, decode_access_token
from userdesk.models import User
from userdesk.schemas.auth import CurrentUser
from userdesk.services.users import validate_user_id

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer JWT and return the current user.

    Role and status come from the stored row, not from the token, so a block or
    role change applies to tokens issued before it.
    """
    if credentials is None:
        raise Unauthenticated()
    try:
        claims = decode_access_token(credentials.credentials)
    except ExpiredToken:
        logger.info("Rejected expired token")
        raise Unauthenticated("Token expired")
    except InvalidToken as e:
        logger.info("Rejected invalid token: %s", e)
        raise Unauthenticated()

    user = db.query(User).filter(User.id == claims.subject_id).first()
    if user is None:
        logger.info("Rejected token for unknown subject id=%s", claims.subject_id)
        raise Unauthenticated()
    return CurrentUser.model_validate(user)


def valid_user_id(id: Annotated[str, Path(description="User id (UUID)")]) -> str:
    """Dependency: the {id} path parameter, checked for UUID format before any lookup."""
    return validate_user_id(id)
