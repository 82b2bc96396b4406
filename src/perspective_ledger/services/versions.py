"""Node version lookups backed by the catalog's ``node`` table."""

from __future__ import annotations

from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from perspective_ledger.core.errors import NodeNotFoundError, StorageFailureError
from perspective_ledger.models import Node


class NodeVersionOracle(Protocol):
    """Source of truth for a node's current content version.

    Implementations must never return a smaller version than one previously
    returned for the same node, and must never reuse a version number for
    different content.
    """

    def current_version(self, node_id: str) -> int:
        """Return the node's version or raise :class:`NodeNotFoundError`."""
        ...


class SqlNodeVersionOracle:
    """Oracle reading ``node.version`` through the request's session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def current_version(self, node_id: str) -> int:
        try:
            version = self.session.execute(
                select(Node.version).where(Node.id == node_id)
            ).scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise StorageFailureError(str(exc)) from exc
        if version is None:
            raise NodeNotFoundError(node_id)
        return int(version)
