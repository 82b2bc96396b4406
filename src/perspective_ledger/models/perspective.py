"""Read model of the external perspective catalog."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from perspective_ledger.db.session import Base


class Perspective(Base):
    """Named viewpoint category that feedback is recorded against.

    Feedback rows reference perspectives by id without a foreign key; the
    ledger does not enforce that a perspective exists.
    """

    __tablename__ = "perspective"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
