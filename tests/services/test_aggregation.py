"""Unit tests for the pure aggregation functions."""

import pytest

from perspective_ledger.services.aggregation import (
    ValidationStats,
    summarize_validations,
    tally_votes,
    tally_votes_by_perspective,
)


@pytest.mark.parametrize(
    "values",
    [[], [1], [-1], [1, 1, -1], [-1, -1, -1, 1, 1]],
)
def test_vote_tally_invariants(values) -> None:
    stats = tally_votes("p1", 3, values)

    assert stats.upvotes + stats.downvotes == len(values)
    assert stats.net_score == stats.upvotes - stats.downvotes
    assert stats.node_version == 3


def test_vote_tally_rejects_values_outside_range() -> None:
    with pytest.raises(ValueError):
        tally_votes("p1", 1, [1, 0])


def test_tally_by_perspective_sorted() -> None:
    stats = tally_votes_by_perspective(2, [("p2", 1), ("p1", -1), ("p2", 1)])

    assert [(s.perspective_id, s.upvotes, s.downvotes) for s in stats] == [
        ("p1", 0, 1),
        ("p2", 2, 0),
    ]


def test_summarize_validations() -> None:
    stats = summarize_validations(
        1,
        [("p1", True), ("p1", False), ("p1", True), ("p2", False)],
    )

    p1, p2 = stats
    assert (p1.total_validations, p1.positive_validations) == (3, 2)
    assert p1.validation_rate == pytest.approx(2 / 3)
    assert p2.validation_rate == 0.0
    for item in stats:
        assert 0.0 <= item.validation_rate <= 1.0
        assert item.positive_validations <= item.total_validations


def test_empty_validation_bucket_has_zero_rate() -> None:
    assert ValidationStats("p1", 1).validation_rate == 0.0
    assert summarize_validations(1, []) == []
