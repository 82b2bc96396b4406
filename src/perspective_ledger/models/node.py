"""Read model of the external node catalog."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, validates

from perspective_ledger.db.session import Base
from perspective_ledger.db.time import utcnow


class Node(Base):
    """Claim or question being annotated.

    Rows are owned by the catalog service. The ledger only reads ``version``,
    which is bumped whenever the node's content changes and is never reused
    for different content.
    """

    __tablename__ = "node"
    __table_args__ = (
        CheckConstraint("version >= 1", name="ck_node_version_positive"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    @validates("version")
    def _validate_version(self, key: str, value: int) -> int:
        # Versions partition feedback buckets; going backwards would merge
        # feedback for different content into one bucket.
        current = self.__dict__.get("version")
        if current is not None and value < current:
            raise ValueError(
                f"node {self.id} version cannot move from {current} back to {value}"
            )
        return value
