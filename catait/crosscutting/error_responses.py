# catait/crosscutting/error_responses.py
"""
===============================================================================
MODULE: Standard error responses (RFC 7807 / Problem Details)
===============================================================================

Goal
----
Make EVERY HTTP error uniform so that:
- The frontend can branch on "code" (and legacy clients keep reading "error")
- The backend can correlate by request_id / error_id
- The API stays consistent and auditable

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Component:
  AppHTTPException + handlers

Responsibilities:
  - Define the error-code catalog (ErrorCode)
  - Build the RFC 7807 payload (ErrorDetail) with the `error`/`details` extensions
  - Provide factories for frequent errors
  - Provide FastAPI handlers that return problem+json

Collaborators:
  - crosscutting/middleware.py (request_id)
  - api/exception_handlers.py (maps internal errors)
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorCode(str, Enum):
    # 4xx
    INVALID_INPUT = "INVALID_INPUT"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    CONFIGURATION_INCOMPLETE = "CONFIGURATION_INCOMPLETE"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"

    # 5xx
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class ErrorDetail(BaseModel):
    """
    RFC 7807 (Problem Details) model.

    Extension members:
    - code: stable error code for clients
    - error: short human message (the field legacy clients read)
    - details: structured diagnostics (e.g. which workflow fields are missing)
    - errors: optional list of correlation/validation entries
    """

    type: str = "about:blank"
    title: str
    status: int
    detail: str
    code: ErrorCode
    error: str
    details: dict[str, Any] | None = None
    instance: str | None = None
    errors: list[dict[str, Any]] | None = None


PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"

_OPENAPI_ERROR_SCHEMA = {"$ref": "#/components/schemas/ErrorDetail"}
_OPENAPI_ERROR_CONTENT = {PROBLEM_JSON_MEDIA_TYPE: {"schema": _OPENAPI_ERROR_SCHEMA}}

OPENAPI_ERROR_RESPONSES = {
    "400": {
        "description": "Bad Request (RFC7807)",
        "model": ErrorDetail,
        "content": _OPENAPI_ERROR_CONTENT,
    },
    "401": {
        "description": "Unauthorized (RFC7807)",
        "model": ErrorDetail,
        "content": _OPENAPI_ERROR_CONTENT,
    },
    "403": {
        "description": "Forbidden (RFC7807)",
        "model": ErrorDetail,
        "content": _OPENAPI_ERROR_CONTENT,
    },
    "404": {
        "description": "Not Found (RFC7807)",
        "model": ErrorDetail,
        "content": _OPENAPI_ERROR_CONTENT,
    },
    "409": {
        "description": "Conflict (RFC7807)",
        "model": ErrorDetail,
        "content": _OPENAPI_ERROR_CONTENT,
    },
    "default": {
        "description": "Error (RFC7807)",
        "model": ErrorDetail,
        "content": _OPENAPI_ERROR_CONTENT,
    },
}


class AppHTTPException(HTTPException):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Class:
      AppHTTPException

    Responsibilities:
      - Attach a stable ErrorCode
      - Carry structured diagnostics (details) and correlation entries (errors)

    Collaborators:
      - app_exception_handler()
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code
        self.errors = errors
        self.details = details


# ---------------------------------------------------------------------------
# Error factories (helpers)
# ---------------------------------------------------------------------------
def invalid_input(
    detail: str,
    errors: list[dict[str, Any]] | None = None,
    details: dict[str, Any] | None = None,
) -> AppHTTPException:
    return AppHTTPException(400, ErrorCode.INVALID_INPUT, detail, errors, details)


def not_found(detail: str) -> AppHTTPException:
    return AppHTTPException(404, ErrorCode.NOT_FOUND, detail)


def configuration_incomplete(
    detail: str, details: dict[str, Any]
) -> AppHTTPException:
    return AppHTTPException(
        400, ErrorCode.CONFIGURATION_INCOMPLETE, detail, details=details
    )


def unauthorized(detail: str = "Authentication required") -> AppHTTPException:
    return AppHTTPException(401, ErrorCode.UNAUTHORIZED, detail)


def forbidden(detail: str = "Access denied") -> AppHTTPException:
    return AppHTTPException(403, ErrorCode.FORBIDDEN, detail)


def conflict(detail: str, details: dict[str, Any] | None = None) -> AppHTTPException:
    return AppHTTPException(409, ErrorCode.CONFLICT, detail, details=details)


def internal_error(detail: str = "Internal server error") -> AppHTTPException:
    return AppHTTPException(500, ErrorCode.INTERNAL_ERROR, detail)


# ---------------------------------------------------------------------------
# FastAPI handlers
# ---------------------------------------------------------------------------
async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    """
    Handler for AppHTTPException.

    Includes the instance (URL) and propagates optional headers.
    """
    request_id = getattr(getattr(request, "state", None), "request_id", None)

    errors = exc.errors or []
    if request_id:
        errors = [*errors, {"request_id": request_id}]

    message = str(exc.detail)
    error = ErrorDetail(
        type=f"about:blank/{exc.code.value.lower()}",
        title=exc.code.value.replace("_", " ").title(),
        status=exc.status_code,
        detail=message,
        code=exc.code,
        error=message,
        details=exc.details,
        instance=str(request.url),
        errors=errors or None,
    )
    headers = getattr(exc, "headers", None)
    return JSONResponse(
        status_code=exc.status_code,
        content=error.model_dump(mode="json", exclude_none=True),
        headers=headers,
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )
