"""
===============================================================================
CRC CARD: catait/api/exception_handlers.py (Centralized exception handling)
===============================================================================

Responsibilities:
  - Translate application exceptions into RFC7807 HTTP responses.
  - Centralize error logging with request_id + error_id.
  - Never leak internal detail from store failures or unhandled errors
    unless EXPOSE_ERROR_DETAILS is on outside production.

Patterns:
  - Exception Mapping (Presentation Layer).
  - Fail-safe: any untyped exception -> INTERNAL_ERROR (logged).

Collaborators:
  - crosscutting.error_responses: AppHTTPException, ErrorCode, app_exception_handler
  - crosscutting.exceptions: CataitError, DatabaseError
  - crosscutting.config.get_settings (detail level)
===============================================================================
"""

from __future__ import annotations

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
)
from ..crosscutting.exceptions import CataitError, DatabaseError
from ..crosscutting.logger import logger

_GENERIC_DETAIL = "Internal server error"


def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


async def _handle_service_error(
    request: Request,
    *,
    exc: CataitError,
    code: ErrorCode,
    status_code: int,
) -> JSONResponse:
    request_id = _request_id_from(request)

    logger.error(
        "service error",
        extra={
            "code": code.value,
            "error_id": exc.error_id,
            "message": exc.message,
            "request_id": request_id,
        },
    )

    detail = exc.message if get_settings().error_details_enabled() else _GENERIC_DETAIL
    app_exc = AppHTTPException(
        status_code=status_code,
        code=code,
        detail=detail,
        errors=[{"error_id": exc.error_id}],
    )
    return await app_exception_handler(request, app_exc)


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    return await _handle_service_error(
        request, exc=exc, code=ErrorCode.DATABASE_ERROR, status_code=500
    )


async def catait_error_handler(request: Request, exc: CataitError) -> JSONResponse:
    return await _handle_service_error(
        request, exc=exc, code=ErrorCode.INTERNAL_ERROR, status_code=500
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies/params -> 400 INVALID_INPUT (input values are not echoed)."""
    errors = [
        {
            "loc": ".".join(str(part) for part in err.get("loc", ())),
            "msg": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    app_exc = AppHTTPException(
        status_code=400,
        code=ErrorCode.INVALID_INPUT,
        detail="Invalid request",
        errors=errors,
    )
    return await app_exception_handler(request, app_exc)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Full stack trace in logs; generic body for the client."""
    request_id = _request_id_from(request)

    logger.error(
        "unhandled exception",
        exc_info=exc,
        extra={"request_id": request_id, "error": str(exc)},
    )

    detail = str(exc) if get_settings().error_details_enabled() else _GENERIC_DETAIL

    app_exc = AppHTTPException(
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        detail=detail,
    )
    return await app_exception_handler(request, app_exc)


def register_exception_handlers(app) -> None:
    """
    Register handlers on the FastAPI app.

    Exception is registered last as the fallback.
    """
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(CataitError, catait_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
