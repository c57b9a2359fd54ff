"""Create key-value blob store and per-user scoring weights.

Revision ID: 001_create_kv_entries_and_scoring_weights
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "001_create_kv_entries_and_scoring_weights"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "kv_entries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("key", sa.String(length=255), nullable=False),
        sa.Column("value", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_kv_entries_id", "kv_entries", ["id"], unique=False)
    op.create_index("ix_kv_entries_key", "kv_entries", ["key"], unique=True)

    op.create_table(
        "user_scoring_weights",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("technical_accuracy", sa.Float(), nullable=False, server_default="0.15"),
        sa.Column("communication_skills", sa.Float(), nullable=False, server_default="0.20"),
        sa.Column("problem_solving", sa.Float(), nullable=False, server_default="0.15"),
        sa.Column("confidence", sa.Float(), nullable=False, server_default="0.10"),
        sa.Column("relevance", sa.Float(), nullable=False, server_default="0.15"),
        sa.Column("clarity", sa.Float(), nullable=False, server_default="0.10"),
        sa.Column("structure", sa.Float(), nullable=False, server_default="0.10"),
        sa.Column("examples", sa.Float(), nullable=False, server_default="0.05"),
        sa.Column("preset_name", sa.String(length=64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_user_scoring_weights_id", "user_scoring_weights", ["id"], unique=False)
    op.create_index("ix_user_scoring_weights_user_id", "user_scoring_weights", ["user_id"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_user_scoring_weights_user_id", table_name="user_scoring_weights")
    op.drop_index("ix_user_scoring_weights_id", table_name="user_scoring_weights")
    op.drop_table("user_scoring_weights")
    op.drop_index("ix_kv_entries_key", table_name="kv_entries")
    op.drop_index("ix_kv_entries_id", table_name="kv_entries")
    op.drop_table("kv_entries")
