"""Mapping from domain errors to HTTP responses."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from commentary.domain.error import (
    ConflictError,
    DomainError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    RateLimitedError,
    UnauthorizedError,
    ValidationError,
)

_STATUS_CODES: dict[type[DomainError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    UnauthorizedError: status.HTTP_401_UNAUTHORIZED,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    RateLimitedError: status.HTTP_429_TOO_MANY_REQUESTS,
    InternalError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _error_body(code: str, message: str, **extra) -> dict:
    return {"error": code, "message": message, **extra}


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Render a domain error with a stable code."""
    status_code = next(
        (
            code
            for error_type, code in _STATUS_CODES.items()
            if isinstance(exc, error_type)
        ),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )

    if isinstance(exc, ValidationError):
        return JSONResponse(
            status_code=status_code,
            content=_error_body(
                exc.code,
                "Invalid input",
                details=[{"field": e.field, "message": e.message} for e in exc.errors],
            ),
        )

    if isinstance(exc, NotFoundError):
        # Hidden and missing resources look the same
        return JSONResponse(
            status_code=status_code,
            content=_error_body(exc.code, f"{exc.resource} not found"),
        )

    if isinstance(exc, RateLimitedError):
        return JSONResponse(
            status_code=status_code,
            content=_error_body(exc.code, str(exc), retry_after=exc.retry_after),
            headers={"Retry-After": str(exc.retry_after)},
        )

    if status_code == status.HTTP_500_INTERNAL_SERVER_ERROR:
        logfire.error(
            "Domain error surfaced as internal error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=status_code,
            content=_error_body("internal_error", "Internal server error"),
        )

    return JSONResponse(status_code=status_code, content=_error_body(exc.code, str(exc)))


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render body/query type errors like domain validation errors."""
    details = [
        {
            "field": ".".join(str(part) for part in e["loc"] if part != "body"),
            "message": e["msg"],
        }
        for e in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("validation_error", "Invalid input", details=details),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Store and collaborator failures: log, never leak detail."""
    logfire.error(
        "Unhandled error",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("internal_error", "Internal server error"),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the exception handlers on an application."""
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
