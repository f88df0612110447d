"""
User directory operations: register, login, list, get and change status.

Each function takes the request's SQLAlchemy Session explicitly and raises
userdesk.core.errors exceptions; the API layer translates them to responses.
Authorization is checked before any lookup so a denied caller learns nothing
about whether the target exists.
"""

import logging
import uuid
from functools import lru_cache

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from userdesk.core.config import Settings, get_settings
from userdesk.core.errors import (
    DuplicateEmail,
    InvalidCredentials,
    NotFound,
    ValidationError,
)
from userdesk.core.security import create_access_token, hash_password, verify_password
from userdesk.models import User, UserRole, UserStatus
from userdesk.services.policy import (
    Actor,
    require_change_status,
    require_list_all_users,
    require_view_user,
)

logger = logging.getLogger(__name__)

VALID_STATUSES = frozenset(s.value for s in UserStatus)
VALID_ROLES = frozenset(r.value for r in UserRole)


@lru_cache
def _dummy_password_hash() -> str:
    """Hash checked for unknown emails so login cost does not reveal whether an account exists."""
    return hash_password("not-a-real-password")


def normalize_email(email: str) -> str:
    """Trim and lowercase the domain part, the same normalization EmailStr applies at registration."""
    local, sep, domain = email.strip().rpartition("@")
    if not sep:
        return email.strip()
    return f"{local}@{domain.lower()}"


def validate_user_id(value: str) -> str:
    """Return the canonical form of a user id, or raise ValidationError if it is not a UUID."""
    try:
        return str(uuid.UUID(value))
    except (ValueError, TypeError, AttributeError):
        raise ValidationError("Invalid id parameter")


def create_user(
    db: Session,
    full_name: str,
    email: str,
    password: str,
    role: str = UserRole.USER.value,
    settings: Settings | None = None,
) -> User:
    """Hash the password and insert a new active user. Raises DuplicateEmail on a taken email."""
    if role not in VALID_ROLES:
        raise ValidationError(f"Invalid role '{role}'")
    user = User(
        full_name=full_name,
        email=normalize_email(email),
        password_hash=hash_password(password, settings=settings),
        role=role,
        status=UserStatus.ACTIVE.value,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateEmail()
    db.refresh(user)
    return user


def register(
    db: Session,
    full_name: str,
    email: str,
    password: str,
    settings: Settings | None = None,
) -> tuple[User, str]:
    """Create a regular, active user and return it with a fresh access token."""
    if not full_name or not email or not password:
        raise ValidationError("Please provide name, email, and password")
    user = create_user(db, full_name, email, password, settings=settings)
    token = create_access_token(user.id, user.full_name, settings=settings)
    logger.info("Registered user id=%s", user.id)
    return user, token


def login(
    db: Session,
    email: str,
    password: str,
    settings: Settings | None = None,
) -> tuple[User, str]:
    """
    Authenticate by email and password.

    Unknown email and wrong password both raise the same InvalidCredentials.
    """
    if not email or not password:
        raise ValidationError("Please provide email and password")
    user = db.query(User).filter(User.email == normalize_email(email)).first()
    if user is None:
        verify_password(password, _dummy_password_hash())
        logger.info("Login failed: invalid credentials")
        raise InvalidCredentials()
    if not verify_password(password, user.password_hash):
        logger.info("Login failed: invalid credentials")
        raise InvalidCredentials()
    token = create_access_token(user.id, user.full_name, settings=settings)
    return user, token


def list_users(
    db: Session,
    actor: Actor,
    skip: int = 0,
    limit: int | None = None,
    settings: Settings | None = None,
) -> tuple[list[User], int]:
    """Admin only: one page of users in creation order plus the total count."""
    require_list_all_users(actor)
    settings = settings or get_settings()
    if limit is None:
        limit = settings.DEFAULT_PAGE_LIMIT
    if (
        isinstance(skip, bool)
        or isinstance(limit, bool)
        or not isinstance(skip, int)
        or not isinstance(limit, int)
        or skip < 0
        or limit < 1
    ):
        raise ValidationError("Incorrect skip or limit params")
    limit = min(limit, settings.MAX_PAGE_LIMIT)

    users = (
        db.query(User)
        .order_by(User.created_at.asc(), User.id.asc())
        .offset(skip)
        .limit(limit)
        .all()
    )
    total = db.query(User).count()
    return users, total


def get_user(db: Session, actor: Actor, target_id: str) -> User:
    """Self-or-admin lookup of a single user."""
    require_view_user(actor, target_id)
    user = db.query(User).filter(User.id == target_id).first()
    if user is None:
        raise NotFound(f"No user with id {target_id}")
    return user


def change_status(db: Session, actor: Actor, target_id: str, new_status: str) -> bool:
    """
    Set a user's status (self-or-admin). Returns True if the stored value changed.

    One conditional UPDATE both applies and detects the change, so two concurrent
    identical requests report True at most once.
    """
    require_change_status(actor, target_id)
    if new_status not in VALID_STATUSES:
        raise ValidationError(
            f"Invalid status '{new_status}'; expected one of: "
            + ", ".join(sorted(VALID_STATUSES))
        )
    updated = (
        db.query(User)
        .filter(User.id == target_id, User.status != new_status)
        .update({User.status: new_status}, synchronize_session=False)
    )
    db.commit()
    if updated:
        logger.info(
            "User status changed: id=%s status=%s by=%s", target_id, new_status, actor.id
        )
        return True
    if db.query(User.id).filter(User.id == target_id).first() is None:
        raise NotFound(f"No user with id {target_id}")
    return False
