"""feedback ledger

Revision ID: 3b9f2c41d7a0
Revises:
Create Date: 2026-10-18 09:12:40.118203

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3b9f2c41d7a0"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_KEY = ["node_id", "node_version", "perspective_id", "voter_key"]


def upgrade() -> None:
    """Create catalog read tables and the vote/validation ledger."""
    op.create_table(
        "node",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("question", sa.Text(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("version >= 1", name="ck_node_version_positive"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "perspective",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "perspective_vote",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("node_id", sa.String(length=64), nullable=False),
        sa.Column("node_version", sa.Integer(), nullable=False),
        sa.Column("perspective_id", sa.String(length=64), nullable=False),
        sa.Column("voter_key", sa.String(length=160), nullable=False),
        sa.Column("user_id", sa.String(length=128), nullable=True),
        sa.Column("vote_value", sa.SmallInteger(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("vote_value IN (1, -1)", name="ck_perspective_vote_value"),
        sa.ForeignKeyConstraint(["node_id"], ["node.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(*_KEY, name="uq_perspective_vote_key"),
    )
    op.create_index(
        "ix_perspective_vote_bucket",
        "perspective_vote",
        ["node_id", "node_version", "perspective_id"],
    )
    op.create_table(
        "validation",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("node_id", sa.String(length=64), nullable=False),
        sa.Column("node_version", sa.Integer(), nullable=False),
        sa.Column("perspective_id", sa.String(length=64), nullable=False),
        sa.Column("voter_key", sa.String(length=160), nullable=False),
        sa.Column("user_id", sa.String(length=128), nullable=True),
        sa.Column("is_represented", sa.Boolean(), nullable=False),
        sa.Column("feedback", sa.Text(), nullable=True),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["node_id"], ["node.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(*_KEY, name="uq_validation_key"),
    )
    op.create_index(
        "ix_validation_node_version",
        "validation",
        ["node_id", "node_version"],
    )


def downgrade() -> None:
    """Drop the ledger and catalog read tables."""
    op.drop_index("ix_validation_node_version", table_name="validation")
    op.drop_table("validation")
    op.drop_index("ix_perspective_vote_bucket", table_name="perspective_vote")
    op.drop_table("perspective_vote")
    op.drop_table("perspective")
    op.drop_table("node")
