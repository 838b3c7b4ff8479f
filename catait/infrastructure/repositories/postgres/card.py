"""
============================================================
CRC CARD: infrastructure/repositories/postgres/card.py
============================================================
Class: PostgresCardRepository

Responsibilities:
- Data access for feature cards in PostgreSQL (raw SQL).
- Enabled-only lookup for the public card endpoint.
- Listing, create/update/delete and transactional reorder for administration.

Collaborators:
- domain.entities.FeatureCard, CardDraft
- crosscutting.exceptions.DatabaseError
- crosscutting.logger.logger
- psycopg_pool.ConnectionPool
- Table: feature_cards

Constraints / Notes:
- No business rules here (workflow completeness is decided in the use case).
- Queries are always parameterized.
- Deterministic ordering in listings: sort_order ASC, id ASC.
- Log extras never carry api_token.
============================================================
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.entities import CardDraft, FeatureCard


class PostgresCardRepository:
    """R: PostgreSQL implementation of CardRepository."""

    # R: Same column order everywhere so _row_to_card stays the single mapping.
    _SELECT_COLUMNS = """
        id, name, description, icon, background_color, sort_order,
        enabled, workflow_id, api_token, created_at, updated_at
    """

    _ORDER_BY = "ORDER BY sort_order ASC, id ASC"

    def __init__(self, pool: Optional[ConnectionPool] = None):
        # R: Injectable pool for tests; production resolves the global one.
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    # =========================================================
    # Mapping
    # =========================================================
    @staticmethod
    def _row_to_card(row: tuple) -> FeatureCard:
        (
            card_id,
            name,
            description,
            icon,
            background_color,
            sort_order,
            enabled,
            workflow_id,
            api_token,
            created_at,
            updated_at,
        ) = row

        return FeatureCard(
            id=card_id,
            name=name,
            description=description,
            icon=icon,
            background_color=background_color,
            sort_order=sort_order,
            enabled=bool(enabled),
            workflow_id=workflow_id,
            api_token=api_token,
            created_at=created_at,
            updated_at=updated_at,
        )

    # =========================================================
    # Execution helpers
    # =========================================================
    def _fetchall(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> list[tuple]:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                return conn.execute(query, tuple(params)).fetchall()
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}", original_error=exc) from exc

    def _fetchone(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> tuple | None:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}", original_error=exc) from exc

    # =========================================================
    # Reads
    # =========================================================
    def get_enabled_card(self, card_id: int) -> Optional[FeatureCard]:
        row = self._fetchone(
            query=f"""
                SELECT {self._SELECT_COLUMNS}
                FROM feature_cards
                WHERE id = %s AND enabled = TRUE
            """,
            params=(card_id,),
            context_msg="PostgresCardRepository: get_enabled_card failed",
            extra={"card_id": card_id},
        )
        return self._row_to_card(row) if row else None

    def list_cards(self, *, include_disabled: bool = False) -> List[FeatureCard]:
        where = "" if include_disabled else "WHERE enabled = TRUE"
        rows = self._fetchall(
            query=f"""
                SELECT {self._SELECT_COLUMNS}
                FROM feature_cards
                {where}
                {self._ORDER_BY}
            """,
            params=(),
            context_msg="PostgresCardRepository: list_cards failed",
            extra={"include_disabled": include_disabled},
        )
        return [self._row_to_card(r) for r in rows]

    # =========================================================
    # Writes
    # =========================================================
    def create_card(self, draft: CardDraft) -> FeatureCard:
        row = self._fetchone(
            query=f"""
                INSERT INTO feature_cards (
                    name, description, icon, background_color, sort_order,
                    enabled, workflow_id, api_token
                )
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                RETURNING {self._SELECT_COLUMNS}
            """,
            params=(
                draft.name,
                draft.description,
                draft.icon,
                draft.background_color,
                draft.sort_order,
                draft.enabled,
                draft.workflow_id,
                draft.api_token,
            ),
            context_msg="PostgresCardRepository: create_card failed",
            extra={"card_name": draft.name},
        )
        if not row:
            raise DatabaseError("PostgresCardRepository: create_card returned no row")
        return self._row_to_card(row)

    def update_card(self, card_id: int, draft: CardDraft) -> Optional[FeatureCard]:
        row = self._fetchone(
            query=f"""
                UPDATE feature_cards
                SET name = %s,
                    description = %s,
                    icon = %s,
                    background_color = %s,
                    sort_order = %s,
                    enabled = %s,
                    workflow_id = %s,
                    api_token = %s,
                    updated_at = NOW()
                WHERE id = %s
                RETURNING {self._SELECT_COLUMNS}
            """,
            params=(
                draft.name,
                draft.description,
                draft.icon,
                draft.background_color,
                draft.sort_order,
                draft.enabled,
                draft.workflow_id,
                draft.api_token,
                card_id,
            ),
            context_msg="PostgresCardRepository: update_card failed",
            extra={"card_id": card_id},
        )
        return self._row_to_card(row) if row else None

    def delete_card(self, card_id: int) -> bool:
        row = self._fetchone(
            query="DELETE FROM feature_cards WHERE id = %s RETURNING id",
            params=(card_id,),
            context_msg="PostgresCardRepository: delete_card failed",
            extra={"card_id": card_id},
        )
        return row is not None

    def reorder_cards(self, card_ids: List[int]) -> int:
        """
        sort_order = position for each id, in one transaction.

        Unknown ids update nothing; the count reflects rows actually touched.
        """
        context_msg = "PostgresCardRepository: reorder_cards failed"
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                with conn.transaction():
                    updated = 0
                    for position, card_id in enumerate(card_ids):
                        cur = conn.execute(
                            """
                            UPDATE feature_cards
                            SET sort_order = %s, updated_at = NOW()
                            WHERE id = %s
                            """,
                            (position, card_id),
                        )
                        updated += max(cur.rowcount, 0)
                    return updated
        except Exception as exc:
            logger.exception(
                context_msg, extra={"card_count": len(card_ids), "error": str(exc)}
            )
            raise DatabaseError(f"{context_msg}: {exc}", original_error=exc) from exc

    # =========================================================
    # Health
    # =========================================================
    def ping(self) -> bool:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                conn.execute("SELECT 1")
            return True
        except Exception:
            logger.warning("PostgresCardRepository: ping failed", exc_info=True)
            return False
