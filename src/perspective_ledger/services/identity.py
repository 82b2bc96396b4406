"""Identity resolution for feedback submissions.

Authentication mechanics stop here: the ledger only ever sees an
:class:`Anonymous` or :class:`Authenticated` value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from jose import JWTError

from perspective_ledger.core.security import decode_access_token
from perspective_ledger.core.settings import settings

logger = logging.getLogger(__name__)

ANONYMOUS_VOTER_KEY = "anonymous"


@dataclass(frozen=True, slots=True)
class Anonymous:
    """Caller without a usable credential.

    ``session`` widens the ledger key when anonymous session slots are
    enabled; ``None`` selects the single shared anonymous slot.
    """

    session: str | None = None

    @property
    def user_id(self) -> None:
        return None

    @property
    def voter_key(self) -> str:
        if self.session is None:
            return ANONYMOUS_VOTER_KEY
        return f"{ANONYMOUS_VOTER_KEY}:{self.session}"


@dataclass(frozen=True, slots=True)
class Authenticated:
    """Caller whose credential verified to ``user_id``."""

    user_id: str

    @property
    def voter_key(self) -> str:
        return f"user:{self.user_id}"


Identity = Anonymous | Authenticated


class IdentityResolver:
    """Turn an optional bearer credential into an :data:`Identity`.

    ``resolve`` never raises: absent, malformed, expired or otherwise
    unverifiable credentials all resolve to :class:`Anonymous`.
    """

    def __init__(
        self,
        *,
        session_slots: bool | None = None,
        max_session_length: int | None = None,
    ) -> None:
        self.session_slots = (
            settings.anonymous_session_slots if session_slots is None else session_slots
        )
        self.max_session_length = (
            settings.anonymous_session_max_length
            if max_session_length is None
            else max_session_length
        )

    def resolve(self, credential: str | None, anonymous_session: str | None = None) -> Identity:
        """Return the identity for ``credential``.

        Args:
            credential: Raw bearer token, without the ``Bearer`` prefix.
            anonymous_session: Optional client-held token used only for
                anonymous callers and only when session slots are enabled.
        """
        if credential:
            user_id = self._user_id_from_token(credential)
            if user_id is not None:
                return Authenticated(user_id=user_id)
        return Anonymous(session=self._anonymous_session(anonymous_session))

    def _user_id_from_token(self, token: str) -> str | None:
        try:
            payload = decode_access_token(token)
        except JWTError as exc:
            logger.debug("Credential rejected, continuing anonymously: %s", exc)
            return None
        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            logger.debug("Credential has no usable subject, continuing anonymously")
            return None
        return subject

    def _anonymous_session(self, token: str | None) -> str | None:
        if not self.session_slots or not token:
            return None
        token = token.strip()
        if not token or len(token) > self.max_session_length:
            return None
        return token


_resolver = IdentityResolver()


def get_identity_resolver() -> IdentityResolver:
    """Return the shared identity resolver."""
    return _resolver
