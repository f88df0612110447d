"""
Domain error taxonomy and the single translator from errors to HTTP responses.

Every failure response has the shape {"msg": "<human readable message>"}.
Authorization failures use 400 rather than 403; clients depend on that code.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong try again later"


class AppError(Exception):
    """Base class for failures that map to a client-visible status code."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = GENERIC_ERROR_MESSAGE

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class DuplicateEmail(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Email already exists"


class AccessDenied(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Access denied"


class Unauthenticated(AppError):
    """Missing, malformed, invalid or expired bearer token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication invalid"


class InvalidCredentials(AppError):
    """Unknown email or wrong password; the two cases are deliberately identical."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


def _error_response(status_code: int, message: str) -> JSONResponse:
    headers = (
        {"WWW-Authenticate": "Bearer"}
        if status_code == status.HTTP_401_UNAUTHORIZED
        else None
    )
    return JSONResponse(status_code=status_code, content={"msg": message}, headers=headers)


def _describe_validation_error(exc: RequestValidationError) -> str:
    """Turn the first pydantic error into a short message, e.g. 'email: field required'."""
    errors = exc.errors()
    if not errors:
        return ValidationError.default_message
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    reason = str(first.get("msg", "invalid value"))
    # pydantic prefixes custom validator messages with "Value error, "
    reason = reason.removeprefix("Value error, ")
    if loc:
        return f"{'.'.join(loc)}: {reason}"
    return reason


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error_response(exc.status_code, exc.message)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _error_response(status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc))


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return _error_response(exc.status_code, "Route does not exist")
    return _error_response(exc.status_code, str(exc.detail))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback: log the traceback, never send internals to the client."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error translators on a FastAPI app."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
