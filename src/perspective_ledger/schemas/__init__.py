"""Pydantic schemas for the perspective ledger API."""

from .common import Envelope, ErrorBody
from .validation import ValidationCreate, ValidationOut, ValidationStatsOut
from .vote import VoteCreate, VoteOut, VoteStatsOut, VoteSubmissionOut

__all__ = [
    "Envelope",
    "ErrorBody",
    "ValidationCreate",
    "ValidationOut",
    "ValidationStatsOut",
    "VoteCreate",
    "VoteOut",
    "VoteStatsOut",
    "VoteSubmissionOut",
]
