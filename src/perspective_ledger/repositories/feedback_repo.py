"""Data access helpers for vote and validation entries."""
from __future__ import annotations

from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from perspective_ledger.core.errors import StorageFailureError
from perspective_ledger.db.time import utcnow
from perspective_ledger.models import PerspectiveVote, Validation
from perspective_ledger.models.feedback import FEEDBACK_KEY_COLUMNS

__all__ = ["FeedbackRepository"]

FeedbackModel = TypeVar("FeedbackModel", PerspectiveVote, Validation)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class FeedbackRepository:
    """Thin wrapper around database access for feedback entries.

    Writes go through the database's native ``INSERT ... ON CONFLICT DO
    UPDATE`` so concurrent submissions for one key are linearized by the
    store rather than by the application.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def upsert_vote(
        self,
        *,
        node_id: str,
        node_version: int,
        perspective_id: str,
        voter_key: str,
        user_id: str | None,
        vote_value: int,
        reason: str | None,
    ) -> PerspectiveVote:
        """Insert or fully replace the vote stored under the given key."""
        return self._upsert(
            PerspectiveVote,
            {
                "node_id": node_id,
                "node_version": node_version,
                "perspective_id": perspective_id,
                "voter_key": voter_key,
                "user_id": user_id,
                "vote_value": vote_value,
                "reason": reason,
                "submitted_at": utcnow(),
            },
        )

    def upsert_validation(
        self,
        *,
        node_id: str,
        node_version: int,
        perspective_id: str,
        voter_key: str,
        user_id: str | None,
        is_represented: bool,
        feedback: str | None,
    ) -> Validation:
        """Insert or fully replace the validation stored under the given key."""
        return self._upsert(
            Validation,
            {
                "node_id": node_id,
                "node_version": node_version,
                "perspective_id": perspective_id,
                "voter_key": voter_key,
                "user_id": user_id,
                "is_represented": is_represented,
                "feedback": feedback,
                "submitted_at": utcnow(),
            },
        )

    def vote_values(self, node_id: str, node_version: int, perspective_id: str) -> list[int]:
        """Return every vote value in one (node, version, perspective) bucket."""
        result = self.session.execute(
            select(PerspectiveVote.vote_value).where(
                PerspectiveVote.node_id == node_id,
                PerspectiveVote.node_version == node_version,
                PerspectiveVote.perspective_id == perspective_id,
            )
        )
        return list(result.scalars())

    def vote_rows(self, node_id: str, node_version: int) -> list[tuple[str, int]]:
        """Return ``(perspective_id, vote_value)`` for every vote on a node version."""
        result = self.session.execute(
            select(PerspectiveVote.perspective_id, PerspectiveVote.vote_value).where(
                PerspectiveVote.node_id == node_id,
                PerspectiveVote.node_version == node_version,
            )
        )
        return [(row.perspective_id, row.vote_value) for row in result]

    def validation_rows(self, node_id: str, node_version: int) -> list[tuple[str, bool]]:
        """Return ``(perspective_id, is_represented)`` for a node version."""
        result = self.session.execute(
            select(Validation.perspective_id, Validation.is_represented).where(
                Validation.node_id == node_id,
                Validation.node_version == node_version,
            )
        )
        return [(row.perspective_id, bool(row.is_represented)) for row in result]

    def get_vote(
        self,
        node_id: str,
        node_version: int,
        perspective_id: str,
        voter_key: str,
    ) -> PerspectiveVote | None:
        """Return the vote stored under the full key, if any."""
        return self._get(PerspectiveVote, node_id, node_version, perspective_id, voter_key)

    def get_validation(
        self,
        node_id: str,
        node_version: int,
        perspective_id: str,
        voter_key: str,
    ) -> Validation | None:
        """Return the validation stored under the full key, if any."""
        return self._get(Validation, node_id, node_version, perspective_id, voter_key)

    def _get(
        self,
        model: type[FeedbackModel],
        node_id: str,
        node_version: int,
        perspective_id: str,
        voter_key: str,
    ) -> FeedbackModel | None:
        result = self.session.execute(
            select(model).where(
                model.node_id == node_id,
                model.node_version == node_version,
                model.perspective_id == perspective_id,
                model.voter_key == voter_key,
            )
        )
        return result.scalars().first()

    def _upsert(self, model: type[FeedbackModel], values: dict[str, Any]) -> FeedbackModel:
        dialect = self.session.get_bind().dialect.name
        insert = _UPSERT_DIALECTS.get(dialect)
        if insert is None:
            raise StorageFailureError(f"Atomic upsert is not supported on {dialect}")

        stmt = insert(model).values([values])
        # Replace every non-key column; a resubmission never merges with the old row.
        replaced = {
            name: stmt.excluded[name] for name in values if name not in FEEDBACK_KEY_COLUMNS
        }
        stmt = stmt.on_conflict_do_update(
            index_elements=list(FEEDBACK_KEY_COLUMNS),
            set_=replaced,
        )
        result = self.session.scalars(
            stmt.returning(model),
            execution_options={"populate_existing": True},
        )
        return result.one()
