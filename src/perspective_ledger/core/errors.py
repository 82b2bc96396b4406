"""Error taxonomy for ledger operations.

Services raise these exceptions; the API layer renders them as a single
``{"data": null, "error": {...}}`` envelope with the matching status code.
"""

from __future__ import annotations

from fastapi import status


class LedgerError(Exception):
    """Base class for failures surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "ledger_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def as_error(self) -> dict[str, str]:
        return {"message": self.message, "code": self.code}


class InvalidArgumentError(LedgerError):
    """A field is missing, malformed or out of range."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_argument"


class NodeNotFoundError(LedgerError):
    """The version oracle has no node with the requested id."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"

    def __init__(self, node_id: str) -> None:
        super().__init__("Node not found")
        self.node_id = node_id


class StorageFailureError(LedgerError):
    """The persistence layer rejected or failed a statement."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "storage_failure"


class ConflictError(LedgerError):
    """Reserved. Same-key races are absorbed by the upsert and never raise this."""

    status_code = status.HTTP_409_CONFLICT
    code = "conflict"


__all__ = [
    "ConflictError",
    "InvalidArgumentError",
    "LedgerError",
    "NodeNotFoundError",
    "StorageFailureError",
]
