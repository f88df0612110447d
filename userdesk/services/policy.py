"""
Authorization policy: pure predicates over an acting user and a target user id.

Nothing here touches the database or the request; callers pass in whatever
object describes the actor (ORM User, CurrentUser, ...) as long as it exposes
id, role and status.
"""

from typing import Protocol

from userdesk.core.errors import AccessDenied
from userdesk.models.user import UserRole, UserStatus

INACTIVE_ACCOUNT_MESSAGE = "Your account is inactive"


class Actor(Protocol):
    id: str
    role: str
    status: str


def is_admin(actor: Actor) -> bool:
    return actor.role == UserRole.ADMIN.value


def is_inactive(actor: Actor) -> bool:
    return actor.status == UserStatus.INACTIVE.value


def can_list_all_users(actor: Actor) -> bool:
    """Only admins can list the whole directory."""
    return is_admin(actor)


def can_view_user(actor: Actor, target_id: str) -> bool:
    """Self-or-admin, but an inactive actor cannot view anything (checked first)."""
    if is_inactive(actor):
        return False
    return is_admin(actor) or actor.id == target_id


def can_change_status(actor: Actor, target_id: str) -> bool:
    """Self-or-admin: users may block/unblock only themselves."""
    return is_admin(actor) or actor.id == target_id


def require_list_all_users(actor: Actor) -> None:
    if not can_list_all_users(actor):
        raise AccessDenied()


def require_view_user(actor: Actor, target_id: str) -> None:
    if can_view_user(actor, target_id):
        return
    if is_inactive(actor):
        raise AccessDenied(INACTIVE_ACCOUNT_MESSAGE)
    raise AccessDenied()


def require_change_status(actor: Actor, target_id: str) -> None:
    if not can_change_status(actor, target_id):
        raise AccessDenied()
