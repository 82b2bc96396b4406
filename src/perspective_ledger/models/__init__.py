"""SQLAlchemy models for the perspective ledger."""

from .feedback import PerspectiveVote, Validation
from .node import Node
from .perspective import Perspective

__all__ = [
    "Node",
    "Perspective",
    "PerspectiveVote",
    "Validation",
]
