"""Versioned feedback ledger.

Votes and validations are stamped with the node version reported by the
version oracle at submission time, written with a single atomic upsert, and
aggregated from scratch on every read.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from perspective_ledger.core.errors import InvalidArgumentError, StorageFailureError
from perspective_ledger.models import PerspectiveVote, Validation
from perspective_ledger.repositories.feedback_repo import FeedbackRepository
from perspective_ledger.services.aggregation import (
    ValidationStats,
    VoteStats,
    summarize_validations,
    tally_votes,
    tally_votes_by_perspective,
)
from perspective_ledger.services.identity import Identity
from perspective_ledger.services.versions import NodeVersionOracle, SqlNodeVersionOracle

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class VoteSubmission:
    """Outcome of a committed vote.

    ``stats`` is ``None`` only when aggregation failed after the write had
    already been committed; ``stats_error`` then explains why.
    """

    entry: PerspectiveVote
    stats: VoteStats | None
    stats_error: str | None = None


def _require_id(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(f"Missing or invalid field: {name}")
    return value


def _optional_text(name: str, value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidArgumentError(f"Invalid field: {name} must be text")
    # Empty text is stored as absent, matching a submission without the field.
    return value or None


def validate_vote_arguments(
    node_id: Any,
    perspective_id: Any,
    vote_value: Any,
    reason: Any = None,
) -> tuple[str, str, int, str | None]:
    """Check vote arguments before any lookup or write happens."""
    node_id = _require_id("node_id", node_id)
    perspective_id = _require_id("perspective_id", perspective_id)
    # bool is an int subclass; True must not count as an upvote.
    if isinstance(vote_value, bool) or not isinstance(vote_value, int) or vote_value not in (1, -1):
        raise InvalidArgumentError("Missing or invalid field: vote_value must be 1 or -1")
    return node_id, perspective_id, vote_value, _optional_text("reason", reason)


def validate_validation_arguments(
    node_id: Any,
    perspective_id: Any,
    is_represented: Any,
    feedback: Any = None,
) -> tuple[str, str, bool, str | None]:
    """Check validation arguments before any lookup or write happens."""
    node_id = _require_id("node_id", node_id)
    perspective_id = _require_id("perspective_id", perspective_id)
    if not isinstance(is_represented, bool):
        raise InvalidArgumentError("Missing or invalid field: is_represented must be a boolean")
    return node_id, perspective_id, is_represented, _optional_text("feedback", feedback)


class FeedbackLedger:
    """Record feedback per (node, version, perspective, identity) and report stats."""

    def __init__(
        self,
        session: Session,
        oracle: NodeVersionOracle | None = None,
        repo: FeedbackRepository | None = None,
    ) -> None:
        self.session = session
        self.oracle = oracle if oracle is not None else SqlNodeVersionOracle(session)
        self.repo = repo if repo is not None else FeedbackRepository(session)

    def submit_vote(
        self,
        node_id: str,
        perspective_id: str,
        identity: Identity,
        vote_value: int,
        reason: str | None = None,
    ) -> VoteSubmission:
        """Record ``identity``'s vote on the node's current version.

        Raises:
            InvalidArgumentError: If ``vote_value`` is not +1/-1 or an id is missing.
            NodeNotFoundError: If the oracle does not know ``node_id``.
            StorageFailureError: If the upsert fails.
        """
        node_id, perspective_id, vote_value, reason = validate_vote_arguments(
            node_id, perspective_id, vote_value, reason
        )
        version = self.oracle.current_version(node_id)
        entry = self._write(
            lambda: self.repo.upsert_vote(
                node_id=node_id,
                node_version=version,
                perspective_id=perspective_id,
                voter_key=identity.voter_key,
                user_id=identity.user_id,
                vote_value=vote_value,
                reason=reason,
            )
        )
        logger.info(
            "Recorded vote %+d on node %s v%d perspective %s",
            vote_value,
            node_id,
            version,
            perspective_id,
        )

        # The write is committed; an aggregation failure must not hide it.
        try:
            stats = self._bucket_vote_stats(node_id, version, perspective_id)
        except (StorageFailureError, ValueError) as exc:
            logger.error(
                "Vote stats unavailable for node %s v%d perspective %s: %s",
                node_id,
                version,
                perspective_id,
                exc,
            )
            return VoteSubmission(
                entry=entry,
                stats=None,
                stats_error=f"Failed to compute vote aggregates: {exc}",
            )
        return VoteSubmission(entry=entry, stats=stats)

    def submit_validation(
        self,
        node_id: str,
        perspective_id: str,
        identity: Identity,
        is_represented: bool,
        feedback: str | None = None,
    ) -> Validation:
        """Record whether ``identity`` finds the perspective fairly represented."""
        node_id, perspective_id, is_represented, feedback = validate_validation_arguments(
            node_id, perspective_id, is_represented, feedback
        )
        version = self.oracle.current_version(node_id)
        entry = self._write(
            lambda: self.repo.upsert_validation(
                node_id=node_id,
                node_version=version,
                perspective_id=perspective_id,
                voter_key=identity.voter_key,
                user_id=identity.user_id,
                is_represented=is_represented,
                feedback=feedback,
            )
        )
        logger.info(
            "Recorded validation %s on node %s v%d perspective %s",
            is_represented,
            node_id,
            version,
            perspective_id,
        )
        return entry

    def get_vote_stats(
        self,
        node_id: str,
        version: int | None,
        perspective_id: str,
    ) -> VoteStats:
        """Tally the votes of one exact (node, version, perspective) bucket.

        A ``version`` of ``None`` selects the node's current version.
        """
        perspective_id = _require_id("perspective_id", perspective_id)
        version = self.resolve_version(node_id, version)
        return self._bucket_vote_stats(node_id, version, perspective_id)

    def get_node_vote_stats(self, node_id: str, version: int | None = None) -> list[VoteStats]:
        """Return vote stats for every perspective voted on in a node version."""
        version = self.resolve_version(node_id, version)
        rows = self._read(lambda: self.repo.vote_rows(node_id, version))
        return tally_votes_by_perspective(version, rows)

    def get_validation_stats(
        self,
        node_id: str,
        version: int | None = None,
    ) -> list[ValidationStats]:
        """Return validation stats per perspective for a node version.

        Defaults to the node's current version.
        """
        version = self.resolve_version(node_id, version)
        rows = self._read(lambda: self.repo.validation_rows(node_id, version))
        return summarize_validations(version, rows)

    def get_my_vote(
        self,
        node_id: str,
        perspective_id: str,
        identity: Identity,
    ) -> PerspectiveVote | None:
        """Return the caller's vote in the current bucket, if any."""
        perspective_id = _require_id("perspective_id", perspective_id)
        version = self.oracle.current_version(node_id)
        return self._read(
            lambda: self.repo.get_vote(node_id, version, perspective_id, identity.voter_key)
        )

    def get_my_validation(
        self,
        node_id: str,
        perspective_id: str,
        identity: Identity,
    ) -> Validation | None:
        """Return the caller's validation in the current bucket, if any."""
        perspective_id = _require_id("perspective_id", perspective_id)
        version = self.oracle.current_version(node_id)
        return self._read(
            lambda: self.repo.get_validation(node_id, version, perspective_id, identity.voter_key)
        )

    def resolve_version(self, node_id: str, version: int | None) -> int:
        """Return ``version`` if it names an existing snapshot, else the current one."""
        current = self.oracle.current_version(node_id)
        if version is None:
            return current
        if version < 1 or version > current:
            raise InvalidArgumentError(
                f"Invalid version {version}: node {node_id} is at version {current}"
            )
        return version

    def _bucket_vote_stats(self, node_id: str, version: int, perspective_id: str) -> VoteStats:
        values = self._read(lambda: self.repo.vote_values(node_id, version, perspective_id))
        return tally_votes(perspective_id, version, values)

    def _write(self, operation: Callable[[], T]) -> T:
        try:
            entry = operation()
            # Detached entries keep their loaded state through commit and later rollbacks.
            self.session.expunge(entry)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Ledger write failed: %s", exc, exc_info=True)
            raise StorageFailureError(str(exc)) from exc
        return entry

    def _read(self, operation: Callable[[], T]) -> T:
        try:
            return operation()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StorageFailureError(str(exc)) from exc
