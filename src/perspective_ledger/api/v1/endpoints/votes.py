"""Perspective vote endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from perspective_ledger.schemas.common import Envelope, ErrorBody
from perspective_ledger.schemas.vote import (
    VoteCreate,
    VoteOut,
    VoteStatsOut,
    VoteSubmissionOut,
)

from ..dependencies import IdentityDep, LedgerDep

router = APIRouter(prefix="/perspectives/vote", tags=["votes"])

PerspectiveQuery = Annotated[str, Query(min_length=1, max_length=64)]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=Envelope[VoteSubmissionOut],
)
async def submit_vote(
    vote_data: VoteCreate,
    identity: IdentityDep,
    ledger: LedgerDep,
) -> Envelope[VoteSubmissionOut]:
    """Record a vote on a perspective of the node's current version."""
    submission = ledger.submit_vote(
        vote_data.node_id,
        vote_data.perspective_id,
        identity,
        vote_data.vote_value,
        vote_data.reason,
    )
    stats = VoteStatsOut.from_stats(submission.stats) if submission.stats else None
    error = None
    if submission.stats_error is not None:
        error = ErrorBody(message=submission.stats_error, code="stats_unavailable")
    return Envelope(
        data=VoteSubmissionOut(
            vote_entry=VoteOut.model_validate(submission.entry),
            stats=stats,
        ),
        error=error,
    )


@router.get("/{node_id}/stats", response_model=Envelope[list[VoteStatsOut]])
async def get_vote_stats(
    node_id: str,
    ledger: LedgerDep,
    perspective_id: Annotated[str | None, Query(min_length=1, max_length=64)] = None,
    version: Annotated[int | None, Query()] = None,
) -> Envelope[list[VoteStatsOut]]:
    """Return vote tallies for a node version, optionally for one perspective."""
    if perspective_id is not None:
        stats = [ledger.get_vote_stats(node_id, version, perspective_id)]
    else:
        stats = ledger.get_node_vote_stats(node_id, version)
    return Envelope(data=[VoteStatsOut.from_stats(item) for item in stats])


@router.get("/{node_id}/my-vote", response_model=Envelope[VoteOut])
async def get_my_vote(
    node_id: str,
    perspective_id: PerspectiveQuery,
    identity: IdentityDep,
    ledger: LedgerDep,
) -> Envelope[VoteOut]:
    """Return the caller's vote in the node's current version, or null."""
    vote = ledger.get_my_vote(node_id, perspective_id, identity)
    return Envelope(data=VoteOut.model_validate(vote) if vote is not None else None)
