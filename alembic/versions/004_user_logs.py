"""
============================================================
CRC CARD (Class / Responsibilities / Collaborators)
============================================================
Class: 004_user_logs (Alembic Migration)

Responsibilities:
  - Create user_logs, the append-only audit trail
    (user, actor, action, client IP, user agent, metadata).
  - Index by user and by time for lookups.

Collaborators:
  - PostgresAuditEventRepository

Policy:
  - Deleting a user keeps their log rows (user_id -> NULL).
  - Downgrade drops the table.
============================================================
"""

from typing import Sequence, Union

from alembic import op

revision: str = "004_user_logs"
down_revision: Union[str, None] = "003_users_reset_token_avatar"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute(
        """
        CREATE TABLE IF NOT EXISTS user_logs (
            id BIGINT GENERATED ALWAYS AS IDENTITY PRIMARY KEY,
            user_id INTEGER REFERENCES users (id) ON DELETE SET NULL,
            actor VARCHAR(100) NOT NULL,
            action VARCHAR(100) NOT NULL,
            ip_address VARCHAR(64),
            user_agent TEXT,
            metadata JSONB NOT NULL DEFAULT '{}'::jsonb,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
        """
    )
    op.execute(
        "CREATE INDEX IF NOT EXISTS ix_user_logs_user_id ON user_logs (user_id)"
    )
    op.execute(
        "CREATE INDEX IF NOT EXISTS ix_user_logs_created_at ON user_logs (created_at)"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS user_logs")
