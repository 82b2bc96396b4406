"""Vote-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt, computed_field

from perspective_ledger.services.aggregation import VoteStats


class VoteCreate(BaseModel):
    """Schema for submitting a perspective vote."""

    node_id: str = Field(..., min_length=1, max_length=64)
    perspective_id: str = Field(..., min_length=1, max_length=64)
    vote_value: StrictInt = Field(..., description="1 for upvote, -1 for downvote")
    reason: str | None = Field(default=None, max_length=2000)


class VoteOut(BaseModel):
    """Stored vote as returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    node_id: str
    node_version: int
    perspective_id: str
    user_id: str | None
    vote_value: int
    reason: str | None
    submitted_at: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def identity(self) -> str:
        return "anonymous" if self.user_id is None else "authenticated"


class VoteStatsOut(BaseModel):
    """Up/down tallies for one (node, version, perspective) bucket."""

    perspective_id: str
    node_version: int
    upvotes: int
    downvotes: int
    net_score: int

    @classmethod
    def from_stats(cls, stats: VoteStats) -> "VoteStatsOut":
        return cls(
            perspective_id=stats.perspective_id,
            node_version=stats.node_version,
            upvotes=stats.upvotes,
            downvotes=stats.downvotes,
            net_score=stats.net_score,
        )


class VoteSubmissionOut(BaseModel):
    """Persisted vote plus the recomputed tallies of its bucket.

    ``stats`` is null when aggregation failed after the vote was saved.
    """

    vote_entry: VoteOut
    stats: VoteStatsOut | None
