"""
===============================================================================
CRC CARD: infrastructure/db/errors.py
===============================================================================

Component:
  Typed pool/connectivity errors

Responsibilities:
  - Avoid generic RuntimeError around the pool lifecycle.
  - Clear semantics: "not initialized", "already initialized", "cannot acquire".
===============================================================================
"""


class DatabasePoolError(Exception):
    """Base class for connection pool errors."""


class PoolAlreadyInitializedError(DatabasePoolError):
    """init_pool() was called more than once."""


class PoolNotInitializedError(DatabasePoolError):
    """The pool was used before init_pool()."""


class DatabaseConnectionError(DatabasePoolError):
    """A connection could not be acquired or validated."""
