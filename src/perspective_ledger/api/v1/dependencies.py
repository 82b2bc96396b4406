"""Shared API dependencies for identity resolution and ledger access."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from perspective_ledger.core.settings import settings
from perspective_ledger.db.session import get_db
from perspective_ledger.services.identity import (
    Identity,
    IdentityResolver,
    get_identity_resolver,
)
from perspective_ledger.services.ledger import FeedbackLedger

# Credentials are optional: a missing header resolves to an anonymous caller.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
IdentityResolverDep = Annotated[IdentityResolver, Depends(get_identity_resolver)]


def get_identity(
    request: Request,
    resolver: IdentityResolverDep,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> Identity:
    """Resolve the caller's identity without ever rejecting the request.

    Args:
        request: Incoming request, consulted for the anonymous session header.
        resolver: Identity resolver injected for the application.
        credentials: Optional HTTP Bearer credentials.

    Returns:
        ``Authenticated`` for a verifiable token, otherwise ``Anonymous``.
    """
    token = credentials.credentials if credentials is not None else None
    anonymous_session = request.headers.get(settings.anonymous_session_header)
    return resolver.resolve(token, anonymous_session=anonymous_session)


def get_ledger(db: SessionDep) -> FeedbackLedger:
    """Return a ledger bound to the request's session."""
    return FeedbackLedger(db)


# Type aliases for identity and ledger dependencies
IdentityDep = Annotated[Identity, Depends(get_identity)]
LedgerDep = Annotated[FeedbackLedger, Depends(get_ledger)]
