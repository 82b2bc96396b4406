"""Pure aggregation of ledger entries into consensus statistics.

Nothing here touches the database or keeps state between calls; callers pass
a snapshot of entries and get fresh numbers back.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class VoteStats:
    perspective_id: str
    node_version: int
    upvotes: int = 0
    downvotes: int = 0

    @property
    def net_score(self) -> int:
        return self.upvotes - self.downvotes

    @property
    def total(self) -> int:
        return self.upvotes + self.downvotes


@dataclass(frozen=True, slots=True)
class ValidationStats:
    perspective_id: str
    node_version: int
    total_validations: int = 0
    positive_validations: int = 0

    @property
    def validation_rate(self) -> float:
        if self.total_validations == 0:
            return 0.0
        return self.positive_validations / self.total_validations


def tally_votes(
    perspective_id: str,
    node_version: int,
    vote_values: Iterable[int],
) -> VoteStats:
    """Count up and down votes for a single bucket.

    Raises:
        ValueError: If a stored value is not +1 or -1.
    """
    upvotes = downvotes = 0
    for value in vote_values:
        if value == 1:
            upvotes += 1
        elif value == -1:
            downvotes += 1
        else:
            raise ValueError(f"vote value {value!r} is not +1 or -1")
    return VoteStats(perspective_id, node_version, upvotes, downvotes)


def tally_votes_by_perspective(
    node_version: int,
    rows: Iterable[tuple[str, int]],
) -> list[VoteStats]:
    """Group ``(perspective_id, vote_value)`` rows into per-perspective stats."""
    grouped: dict[str, list[int]] = {}
    for perspective_id, value in rows:
        grouped.setdefault(perspective_id, []).append(value)
    return [
        tally_votes(perspective_id, node_version, values)
        for perspective_id, values in sorted(grouped.items())
    ]


def summarize_validations(
    node_version: int,
    rows: Iterable[tuple[str, bool]],
) -> list[ValidationStats]:
    """Group ``(perspective_id, is_represented)`` rows into per-perspective stats."""
    totals: dict[str, list[int]] = {}
    for perspective_id, is_represented in rows:
        counts = totals.setdefault(perspective_id, [0, 0])
        counts[0] += 1
        if is_represented:
            counts[1] += 1
    return [
        ValidationStats(perspective_id, node_version, total, positive)
        for perspective_id, (total, positive) in sorted(totals.items())
    ]
