"""Translation of domain errors into HTTP responses.

Every error body has the shape ``{"success": false, "message": "..."}``.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from inkwell.domain.error import (
    DomainError,
    ForbiddenError,
    InvalidChallengeError,
    NotAuthenticatedError,
    NotFoundError,
    RateLimitedError,
    UnavailableError,
    ValidationError,
)

_STATUS_BY_ERROR: dict[type[DomainError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidChallengeError: status.HTTP_400_BAD_REQUEST,
    NotAuthenticatedError: status.HTTP_401_UNAUTHORIZED,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    RateLimitedError: status.HTTP_429_TOO_MANY_REQUESTS,
    UnavailableError: status.HTTP_502_BAD_GATEWAY,
}

UNAVAILABLE_MESSAGE = "A required service is temporarily unavailable. Please try again later."
INTERNAL_MESSAGE = "Internal server error"


def error_body(message: str) -> dict:
    return {"success": False, "message": message}


def status_for(error: DomainError) -> int:
    for cls in type(error).__mro__:
        if cls in _STATUS_BY_ERROR:
            return _STATUS_BY_ERROR[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _message_for(error: DomainError) -> str:
    if isinstance(error, NotFoundError):
        return f"{error.resource} not found"
    if isinstance(error, UnavailableError):
        return UNAVAILABLE_MESSAGE
    return str(error)


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    code = status_for(exc)
    if code >= 500:
        logfire.error(
            "Request failed",
            path=request.url.path,
            status_code=code,
            error_type=type(exc).__name__,
            error=str(exc),
        )
    else:
        logfire.warn(
            "Request rejected",
            path=request.url.path,
            status_code=code,
            error_type=type(exc).__name__,
            error=str(exc),
        )
    return JSONResponse(status_code=code, content=error_body(_message_for(exc)))


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid request: {field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Invalid request"
    logfire.warn("Request validation failed", path=request.url.path, errors=len(errors))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content=error_body(message)
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logfire.exception(
        "Unhandled error", path=request.url.path, error_type=type(exc).__name__
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(INTERNAL_MESSAGE),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the error handlers on an application."""
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
