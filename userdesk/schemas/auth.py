"""Request/response schemas for auth endpoints."""

import re

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from userdesk.schemas.users import UserOut

FULL_NAME_MIN_LEN = 3
FULL_NAME_MAX_LEN = 150
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

# At least one digit, one symbol, one lower and one upper case letter.
PASSWORD_PATTERN = re.compile(r"^(?=.*\d)(?=.*[!@#$%^&*])(?=.*[a-z])(?=.*[A-Z]).+$")


class RegisterRequest(BaseModel):
    """Registration payload. Role and status are never taken from the client."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    full_name: str = Field(
        ...,
        min_length=FULL_NAME_MIN_LEN,
        max_length=FULL_NAME_MAX_LEN,
        description="Full name",
    )
    email: EmailStr = Field(..., description="Email address (unique)")
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
        description="Password",
    )

    @field_validator("full_name")
    @classmethod
    def strip_full_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < FULL_NAME_MIN_LEN:
            raise ValueError(f"must be at least {FULL_NAME_MIN_LEN} characters")
        return v

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        if not PASSWORD_PATTERN.match(v):
            raise ValueError(
                "should be at least a symbol, upper and lower case letters and a number"
            )
        return v


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=255, description="Email address")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class AuthResponse(BaseModel):
    """Created or authenticated user plus a bearer token."""

    user: UserOut
    token: str = Field(..., description="JWT access token")


class TokenClaims(BaseModel):
    """Identity asserted by a verified access token."""

    subject_id: str
    display_name: str


class CurrentUser(BaseModel):
    """Authenticated user loaded from the database for dependency injection."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str
    role: str
    status: str
