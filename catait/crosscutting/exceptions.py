# catait/crosscutting/exceptions.py
"""
===============================================================================
MODULE: Typed backend exceptions (internal errors)
===============================================================================

Goal
----
Internal exceptions with:
- a stable error_code
- an error_id for log correlation
- a human message that never carries secrets

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Component:
  CataitError + subclasses

Responsibilities:
  - Standardize internal errors that are later mapped to HTTP
  - Generate error_id for tracing

Collaborators:
  - api/exception_handlers.py (maps to AppHTTPException)
  - crosscutting/logger.py
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class CataitError(Exception):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Class:
      CataitError

    Responsibilities:
      - Base for internal system errors
      - Carry error_code + error_id + message

    Collaborators:
      - api/exception_handlers.py
    ----------------------------------------------------------------------------
    """

    error_code: str = "CATAIT_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class DatabaseError(CataitError):
    """Store failures (connection, query, timeout, pool). Surfaced as StoreUnavailable."""

    error_code: str = "DATABASE_ERROR"


class ConflictError(CataitError):
    """A unique column (username, email, phone) is already taken."""

    error_code: str = "CONFLICT"

    def __init__(self, message: str, field: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
