"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from userdesk.core.config import Settings, get_settings
from userdesk.schemas.auth import TokenClaims

# bcrypt only looks at the first 72 bytes of a password.
BCRYPT_MAX_BYTES = 72


class TokenError(Exception):
    """Base exception for token verification failures."""


class InvalidToken(TokenError):
    """Token is absent, malformed, badly signed or missing required claims."""


class ExpiredToken(TokenError):
    """Token signature is valid but its exp claim has passed."""


def hash_password(plain_password: str, *, settings: Settings | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    settings = settings or get_settings()
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(
    subject_id: str,
    display_name: str,
    *,
    settings: Settings | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token with sub (user id), name, iat and exp."""
    settings = settings or get_settings()
    now = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(subject_id),
        "name": display_name,
        "iat": now,
        "exp": now + expires_delta,
    }
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(payload, secret, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str | None, *, settings: Settings | None = None) -> TokenClaims:
    """
    Decode and validate a JWT; return the subject id and display name.

    Raises ExpiredToken when exp has passed and InvalidToken for everything else
    (bad signature, malformed, empty, missing claims).
    """
    if not token:
        raise InvalidToken("Token is missing")
    settings = settings or get_settings()
    secret = settings.JWT_SECRET.get_secret_value()
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["sub", "exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise ExpiredToken("Token has expired") from e
    except jwt.PyJWTError as e:
        raise InvalidToken(f"Invalid token: {e}") from e

    sub = payload.get("sub")
    name = payload.get("name")
    if not isinstance(sub, str) or not sub or not isinstance(name, str):
        raise InvalidToken("Invalid token payload")
    return TokenClaims(subject_id=sub, display_name=name)
