"""HTTP error mapping.

Domain and token errors become JSON bodies of the form
`{"detail": ..., "code": ...}`, with `errors` added for validation
failures. Internal causes are logged, never returned.
"""

import logging

from dishka.exceptions import ExitError
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from invoicely.domain.error import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ProviderDisabledError,
    StoreUnavailableError,
    ValidationError,
)
from invoicely.util.jwt import JWTError

logger = logging.getLogger(__name__)


def _error(status_code: int, detail: str, code: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "code": code, **extra},
    )


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return _error(
        status.HTTP_400_BAD_REQUEST,
        "Validation error",
        "validation_error",
        errors=[{"field": e.field, "message": e.message} for e in exc.errors],
    )


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(part) for part in e["loc"] if part != "body"),
            "message": e["msg"],
        }
        for e in exc.errors()
    ]
    return _error(
        status.HTTP_400_BAD_REQUEST, "Validation error", "validation_error", errors=errors
    )


async def handle_conflict(request: Request, exc: ConflictError) -> JSONResponse:
    if exc.field == "email":
        return _error(status.HTTP_409_CONFLICT, "Email already registered", "duplicate_email")
    return _error(status.HTTP_409_CONFLICT, str(exc), "conflict")


async def handle_authentication_error(
    request: Request, exc: AuthenticationError
) -> JSONResponse:
    return _error(status.HTTP_401_UNAUTHORIZED, str(exc), exc.code)


async def handle_token_error(request: Request, exc: JWTError) -> JSONResponse:
    return _error(status.HTTP_401_UNAUTHORIZED, "Invalid or expired token", "invalid_token")


async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return _error(status.HTTP_404_NOT_FOUND, f"{exc.resource} not found", "not_found")


async def handle_store_unavailable(
    request: Request, exc: StoreUnavailableError
) -> JSONResponse:
    logger.error(f"Store unavailable: {exc}")
    return _error(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "Service temporarily unavailable",
        "store_unavailable",
    )


async def handle_provider_disabled(
    request: Request, exc: ProviderDisabledError
) -> JSONResponse:
    return _error(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "Google sign-in is not available",
        "provider_disabled",
    )


async def handle_cleanup_error(request: Request, exc: ExitError) -> JSONResponse:
    # Raised when the request transaction fails to commit after the handler returned
    logger.error(f"Request cleanup failed: {exc.exceptions!r}")
    if exc.subgroup(StoreUnavailableError) is not None:
        return await handle_store_unavailable(request, StoreUnavailableError(str(exc)))
    return _error(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", "internal_error"
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register domain error handlers on the application."""
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(ConflictError, handle_conflict)
    app.add_exception_handler(AuthenticationError, handle_authentication_error)
    app.add_exception_handler(JWTError, handle_token_error)
    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(StoreUnavailableError, handle_store_unavailable)
    app.add_exception_handler(ProviderDisabledError, handle_provider_disabled)
    app.add_exception_handler(ExitError, handle_cleanup_error)
