"""
============================================================
CRC CARD: infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - Load users for the password-reset flow (by live token / by identifiers).
  - Issue, consume and clear reset tokens.
  - Administration: paginated search, create, partial update, soft-deactivate.
  - Run parameterized SQL against `users` (contract with migrations).
  - Map raw rows -> domain `User`.
  - Surface failures consistently as `DatabaseError` with structured logging;
    unique violations become `ConflictError` naming the taken field.

Collaborators:
  - psycopg_pool.ConnectionPool
  - infrastructure.db.pool.get_pool (global pool accessor)
  - domain.entities.User
  - crosscutting.logger.logger / crosscutting.exceptions.DatabaseError

Constraints / Notes:
  - No business rules (TTL, password policy live in the use cases).
  - Returns None when the row does not exist (no exception for "not found").
  - The clock is passed in (`now`) so expiry checks are deterministic in tests.
  - Tokens and hashes are never put in log extras.
============================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from psycopg import errors as pg_errors
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import ConflictError, DatabaseError
from ....crosscutting.logger import logger
from ....domain.entities import NewUser, User, UserChanges

# R: Explicit column list keeps the contract with migrations in one place.
_USER_COLUMNS = (
    "id, username, email, phone, password_hash, avatar, is_active, "
    "reset_token, reset_token_expiry, created_at, updated_at, invite_code"
)

_UNIQUE_CONSTRAINT_FIELDS = {
    "uq_users_username": "username",
    "uq_users_email": "email",
    "uq_users_phone": "phone",
}

# R: Columns an admin update may touch; UserChanges never adds others.
_UPDATABLE_COLUMNS = (
    "username",
    "email",
    "phone",
    "password_hash",
    "avatar",
    "is_active",
)


def _row_to_user(row: tuple) -> User:
    return User(
        id=row[0],
        username=row[1],
        email=row[2],
        phone=row[3],
        password_hash=row[4],
        avatar=row[5],
        is_active=bool(row[6]),
        reset_token=row[7],
        reset_token_expiry=row[8],
        created_at=row[9],
        updated_at=row[10],
        invite_code=row[11],
    )


class PostgresUserRepository:
    """R: PostgreSQL implementation of UserRepository."""

    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    def _fetchone(
        self,
        *,
        query: str,
        params: Iterable[object],
        log_msg: str,
        log_extra: dict[str, object],
    ) -> tuple | None:
        """SELECT/UPDATE ... RETURNING with consistent logging + DatabaseError."""
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except pg_errors.UniqueViolation as exc:
            constraint = getattr(exc.diag, "constraint_name", None)
            field = _UNIQUE_CONSTRAINT_FIELDS.get(constraint or "")
            logger.warning(log_msg, extra={**log_extra, "constraint": constraint})
            raise ConflictError(
                f"{field or 'value'} already exists", field=field, original_error=exc
            ) from exc
        except Exception as exc:
            logger.exception(log_msg, extra={**log_extra, "error": str(exc)})
            raise DatabaseError(f"{log_msg}: {exc}", original_error=exc) from exc

    def _fetchall(
        self,
        *,
        query: str,
        params: Iterable[object],
        log_msg: str,
        log_extra: dict[str, object],
    ) -> list[tuple]:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                return conn.execute(query, tuple(params)).fetchall()
        except Exception as exc:
            logger.exception(log_msg, extra={**log_extra, "error": str(exc)})
            raise DatabaseError(f"{log_msg}: {exc}", original_error=exc) from exc

    # ============================================================
    # Reads
    # ============================================================
    def get_user_by_reset_token(self, token: str, *, now: datetime) -> Optional[User]:
        """Exact token match, strictly unexpired."""
        row = self._fetchone(
            query=f"""
                SELECT {_USER_COLUMNS}
                FROM users
                WHERE reset_token = %s AND reset_token_expiry > %s
            """,
            params=(token, now),
            log_msg="PostgresUserRepository: get_user_by_reset_token failed",
            log_extra={},
        )
        return _row_to_user(row) if row else None

    def find_user_for_reset(
        self, *, username: str, email: str, phone: str
    ) -> Optional[User]:
        row = self._fetchone(
            query=f"""
                SELECT {_USER_COLUMNS}
                FROM users
                WHERE username = %s AND email = %s AND phone = %s
                  AND is_active = TRUE
            """,
            params=(username, email, phone),
            log_msg="PostgresUserRepository: find_user_for_reset failed",
            log_extra={"username": username},
        )
        return _row_to_user(row) if row else None

    # ============================================================
    # Writes
    # ============================================================
    def set_reset_token(
        self, user_id: int, *, token: str, expires_at: datetime
    ) -> bool:
        row = self._fetchone(
            query="""
                UPDATE users
                SET reset_token = %s, reset_token_expiry = %s, updated_at = NOW()
                WHERE id = %s
                RETURNING id
            """,
            params=(token, expires_at, user_id),
            log_msg="PostgresUserRepository: set_reset_token failed",
            log_extra={"user_id": user_id},
        )
        return row is not None

    def reset_password_with_token(
        self, token: str, *, password_hash: str, now: datetime
    ) -> Optional[User]:
        # R: Lookup, password change and token clear happen in one statement,
        #    so a token can only be consumed once.
        row = self._fetchone(
            query=f"""
                UPDATE users
                SET password_hash = %s,
                    reset_token = NULL,
                    reset_token_expiry = NULL,
                    updated_at = NOW()
                WHERE reset_token = %s AND reset_token_expiry > %s
                RETURNING {_USER_COLUMNS}
            """,
            params=(password_hash, token, now),
            log_msg="PostgresUserRepository: reset_password_with_token failed",
            log_extra={},
        )
        return _row_to_user(row) if row else None

    def set_password_by_username(self, username: str, *, password_hash: str) -> bool:
        row = self._fetchone(
            query="""
                UPDATE users
                SET password_hash = %s,
                    reset_token = NULL,
                    reset_token_expiry = NULL,
                    updated_at = NOW()
                WHERE username = %s
                RETURNING id
            """,
            params=(password_hash, username),
            log_msg="PostgresUserRepository: set_password_by_username failed",
            log_extra={"username": username},
        )
        return row is not None

    # ============================================================
    # Administration
    # ============================================================
    def get_user(self, user_id: int) -> Optional[User]:
        row = self._fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s",
            params=(user_id,),
            log_msg="PostgresUserRepository: get_user failed",
            log_extra={"user_id": user_id},
        )
        return _row_to_user(row) if row else None

    def list_users(
        self, *, search: Optional[str], limit: int, offset: int
    ) -> Tuple[List[User], int]:
        where = ""
        params: list[object] = []
        needle = (search or "").strip()
        if needle:
            where = "WHERE username ILIKE %s OR email ILIKE %s OR phone ILIKE %s"
            pattern = f"%{needle}%"
            params = [pattern, pattern, pattern]

        count_row = self._fetchone(
            query=f"SELECT COUNT(*) FROM users {where}",
            params=params,
            log_msg="PostgresUserRepository: count users failed",
            log_extra={},
        )
        rows = self._fetchall(
            query=f"""
                SELECT {_USER_COLUMNS}
                FROM users
                {where}
                ORDER BY created_at DESC, id DESC
                LIMIT %s OFFSET %s
            """,
            params=[*params, limit, offset],
            log_msg="PostgresUserRepository: list_users failed",
            log_extra={"limit": limit, "offset": offset},
        )
        total = int(count_row[0]) if count_row else 0
        return [_row_to_user(row) for row in rows], total

    def find_taken_field(
        self,
        *,
        username: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        exclude_user_id: Optional[int] = None,
    ) -> Optional[str]:
        for field_name, value in (
            ("username", username),
            ("email", email),
            ("phone", phone),
        ):
            if value is None:
                continue
            row = self._fetchone(
                query=f"""
                    SELECT id FROM users
                    WHERE {field_name} = %s AND (%s::int IS NULL OR id <> %s)
                    LIMIT 1
                """,
                params=(value, exclude_user_id, exclude_user_id),
                log_msg="PostgresUserRepository: find_taken_field failed",
                log_extra={"field": field_name},
            )
            if row:
                return field_name
        return None

    def create_user(self, new_user: NewUser) -> User:
        row = self._fetchone(
            query=f"""
                INSERT INTO users
                    (username, email, phone, password_hash, invite_code)
                VALUES (%s, %s, %s, %s, %s)
                RETURNING {_USER_COLUMNS}
            """,
            params=(
                new_user.username,
                new_user.email,
                new_user.phone,
                new_user.password_hash,
                new_user.invite_code,
            ),
            log_msg="PostgresUserRepository: create_user failed",
            log_extra={"username": new_user.username},
        )
        if row is None:
            raise DatabaseError("PostgresUserRepository: create_user returned no row")
        return _row_to_user(row)

    def update_user(self, user_id: int, changes: UserChanges) -> Optional[User]:
        columns = {
            name: value
            for name, value in changes.as_columns().items()
            if name in _UPDATABLE_COLUMNS
        }
        if not columns:
            return self.get_user(user_id)

        assignments = ", ".join(f"{name} = %s" for name in columns)
        row = self._fetchone(
            query=f"""
                UPDATE users
                SET {assignments}, updated_at = NOW()
                WHERE id = %s
                RETURNING {_USER_COLUMNS}
            """,
            params=(*columns.values(), user_id),
            log_msg="PostgresUserRepository: update_user failed",
            log_extra={"user_id": user_id, "fields": sorted(columns)},
        )
        return _row_to_user(row) if row else None

    def deactivate_user(self, user_id: int) -> bool:
        row = self._fetchone(
            query="""
                UPDATE users
                SET is_active = FALSE, updated_at = NOW()
                WHERE id = %s
                RETURNING id
            """,
            params=(user_id,),
            log_msg="PostgresUserRepository: deactivate_user failed",
            log_extra={"user_id": user_id},
        )
        return row is not None
