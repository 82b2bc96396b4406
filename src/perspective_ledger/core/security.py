"""JWT helpers shared by the identity resolver and tooling."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import jwt

from perspective_ledger.core.settings import settings


def create_access_token(subject: str, extra_claims: dict[str, Any] | None = None) -> str:
    """Create a signed access token for ``subject``.

    Token issuance belongs to the auth provider; this helper exists for local
    tooling and tests that need a credential the resolver accepts.
    """
    to_encode: dict[str, Any] = {"sub": subject}
    if settings.jwt_audience:
        to_encode["aud"] = settings.jwt_audience
    if extra_claims:
        to_encode.update(extra_claims)
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = expire
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode and verify ``token``.

    Raises:
        jose.JWTError: If the signature, expiry or audience check fails.
    """
    options = {"verify_aud": settings.jwt_audience is not None}
    return jwt.decode(
        token,
        settings.secret_key,
        algorithms=[settings.jwt_algorithm],
        audience=settings.jwt_audience,
        options=options,
    )
