"""Business logic services for the perspective ledger."""

from .aggregation import ValidationStats, VoteStats
from .identity import Anonymous, Authenticated, IdentityResolver
from .ledger import FeedbackLedger, VoteSubmission
from .versions import NodeVersionOracle, SqlNodeVersionOracle

__all__ = [
    "Anonymous",
    "Authenticated",
    "FeedbackLedger",
    "IdentityResolver",
    "NodeVersionOracle",
    "SqlNodeVersionOracle",
    "ValidationStats",
    "VoteStats",
    "VoteSubmission",
]
