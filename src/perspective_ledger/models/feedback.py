"""Models capturing votes and validations against node versions."""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from perspective_ledger.db.session import Base
from perspective_ledger.db.time import utcnow

# Columns forming the upsert key of every feedback table.
FEEDBACK_KEY_COLUMNS = ("node_id", "node_version", "perspective_id", "voter_key")


class PerspectiveVote(Base):
    """Per-identity vote on how well a perspective is argued for a node version."""

    __tablename__ = "perspective_vote"
    __table_args__ = (
        CheckConstraint("vote_value IN (1, -1)", name="ck_perspective_vote_value"),
        UniqueConstraint(*FEEDBACK_KEY_COLUMNS, name="uq_perspective_vote_key"),
        Index("ix_perspective_vote_bucket", "node_id", "node_version", "perspective_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    node_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("node.id", ondelete="CASCADE"),
        nullable=False,
    )
    node_version: Mapped[int] = mapped_column(Integer, nullable=False)
    perspective_id: Mapped[str] = mapped_column(String(64), nullable=False)

    # "user:<id>", "anonymous" or "anonymous:<session>"; never NULL so the
    # unique constraint also covers anonymous submissions.
    voter_key: Mapped[str] = mapped_column(String(160), nullable=False)
    user_id: Mapped[str | None] = mapped_column(String(128), nullable=True)

    # 1 = upvote, -1 = downvote.
    vote_value: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )


class Validation(Base):
    """Per-identity judgement of whether a perspective is fairly represented."""

    __tablename__ = "validation"
    __table_args__ = (
        UniqueConstraint(*FEEDBACK_KEY_COLUMNS, name="uq_validation_key"),
        Index("ix_validation_node_version", "node_id", "node_version"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    node_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("node.id", ondelete="CASCADE"),
        nullable=False,
    )
    node_version: Mapped[int] = mapped_column(Integer, nullable=False)
    perspective_id: Mapped[str] = mapped_column(String(64), nullable=False)
    voter_key: Mapped[str] = mapped_column(String(160), nullable=False)
    user_id: Mapped[str | None] = mapped_column(String(128), nullable=True)

    is_represented: Mapped[bool] = mapped_column(Boolean, nullable=False)
    feedback: Mapped[str | None] = mapped_column(Text, nullable=True)
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
