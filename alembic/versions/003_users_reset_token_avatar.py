"""
============================================================
CRC CARD (Class / Responsibilities / Collaborators)
============================================================
Class: 003_users_reset_token_avatar (Alembic Migration)

Responsibilities:
  - Add users.avatar.
  - Add users.reset_token / reset_token_expiry for the password reset flow.
  - Index reset_token (lookup is by exact token).

Collaborators:
  - PostgresUserRepository

Policy:
  - Additive; downgrade drops the columns and the index.
  - IF NOT EXISTS so environments patched by hand upgrade cleanly.
============================================================
"""

from typing import Sequence, Union

from alembic import op

revision: str = "003_users_reset_token_avatar"
down_revision: Union[str, None] = "002_feature_cards_api_token"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_RESET_TOKEN_INDEX = "ix_users_reset_token"


def upgrade() -> None:
    op.execute("ALTER TABLE users ADD COLUMN IF NOT EXISTS avatar VARCHAR(500)")
    op.execute("ALTER TABLE users ADD COLUMN IF NOT EXISTS reset_token VARCHAR(255)")
    op.execute(
        "ALTER TABLE users ADD COLUMN IF NOT EXISTS reset_token_expiry TIMESTAMPTZ"
    )
    op.execute(
        f"CREATE INDEX IF NOT EXISTS {_RESET_TOKEN_INDEX} ON users (reset_token)"
    )


def downgrade() -> None:
    op.execute(f"DROP INDEX IF EXISTS {_RESET_TOKEN_INDEX}")
    op.execute("ALTER TABLE users DROP COLUMN IF EXISTS reset_token_expiry")
    op.execute("ALTER TABLE users DROP COLUMN IF EXISTS reset_token")
    op.execute("ALTER TABLE users DROP COLUMN IF EXISTS avatar")
