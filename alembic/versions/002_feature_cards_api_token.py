"""
============================================================
CRC CARD (Class / Responsibilities / Collaborators)
============================================================
Class: 002_feature_cards_api_token (Alembic Migration)

Responsibilities:
  - Drop feature_cards.workflow_enabled (a card is actionable when both
    workflow fields are present).
  - Rename feature_cards.api_key -> api_token.

Collaborators:
  - PostgresCardRepository (reads api_token)

Policy:
  - Downgrade restores the legacy columns; workflow_enabled comes back as
    "both workflow fields present".
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "002_feature_cards_api_token"
down_revision: Union[str, None] = "001_foundation"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.drop_column("feature_cards", "workflow_enabled")
    op.alter_column("feature_cards", "api_key", new_column_name="api_token")


def downgrade() -> None:
    op.alter_column("feature_cards", "api_token", new_column_name="api_key")
    op.add_column(
        "feature_cards",
        sa.Column(
            "workflow_enabled",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("false"),
        ),
    )
    op.execute(
        """
        UPDATE feature_cards
        SET workflow_enabled = TRUE
        WHERE COALESCE(workflow_id, '') <> '' AND COALESCE(api_key, '') <> ''
        """
    )
