"""
============================================================
CRC CARD (Class / Responsibilities / Collaborators)
============================================================
Class: 001_foundation (Alembic Migration)

Responsibilities:
  - Create `users` and `feature_cards` in their original shape.
  - feature_cards still carries the legacy `api_key` and `workflow_enabled`
    columns; 002 moves them to the current contract.

Collaborators:
  - PostgreSQL 14+
  - Repositories (use this schema as their contract)

Policy:
  - BASELINE migration. Downgrade drops both tables.
  - Naming convention:
      pk_<table>          - Primary keys
      uq_<table>_<col>    - Unique constraints
      ix_<table>_<col>    - Indexes
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001_foundation"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # =========================================================
    # 1) USERS
    # =========================================================
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, sa.Identity(), nullable=False),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("email", sa.String(100), nullable=False),
        sa.Column("phone", sa.String(20), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("invite_code", sa.String(20), nullable=True),
        sa.Column(
            "is_active",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("true"),
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.UniqueConstraint("phone", name="uq_users_phone"),
    )
    op.create_index(
        "ix_users_created_at",
        "users",
        [sa.text("created_at DESC")],
    )

    # =========================================================
    # 2) FEATURE CARDS
    # =========================================================
    op.create_table(
        "feature_cards",
        sa.Column("id", sa.Integer, sa.Identity(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("icon", sa.String(100), nullable=False),
        sa.Column(
            "background_color",
            sa.String(100),
            nullable=False,
            server_default=sa.text("'bg-blue-500'"),
        ),
        sa.Column(
            "sort_order",
            sa.Integer,
            nullable=False,
            server_default=sa.text("0"),
        ),
        sa.Column(
            "enabled",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("true"),
        ),
        sa.Column(
            "workflow_enabled",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column("workflow_id", sa.String(255), nullable=True),
        sa.Column("api_key", sa.String(500), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.PrimaryKeyConstraint("id", name="pk_feature_cards"),
    )
    op.create_index(
        "ix_feature_cards_sort_order",
        "feature_cards",
        ["sort_order", "id"],
    )


def downgrade() -> None:
    op.drop_index("ix_feature_cards_sort_order", table_name="feature_cards")
    op.drop_table("feature_cards")
    op.drop_index("ix_users_created_at", table_name="users")
    op.drop_table("users")
