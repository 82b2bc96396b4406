"""Tests for identity resolution."""

from datetime import timedelta

import pytest
from jose import jwt

from perspective_ledger.core.security import create_access_token
from perspective_ledger.core.settings import settings
from perspective_ledger.db.time import utcnow
from perspective_ledger.services.identity import Anonymous, Authenticated, IdentityResolver


@pytest.fixture()
def resolver() -> IdentityResolver:
    return IdentityResolver(session_slots=False)


def test_valid_token_resolves_user(resolver) -> None:
    identity = resolver.resolve(create_access_token("alice"))

    assert identity == Authenticated(user_id="alice")
    assert identity.voter_key == "user:alice"


@pytest.mark.parametrize("credential", [None, "", "garbage", "a.b.c"])
def test_unusable_credentials_are_anonymous(resolver, credential) -> None:
    identity = resolver.resolve(credential)

    assert identity == Anonymous()
    assert identity.user_id is None
    assert identity.voter_key == "anonymous"


def test_expired_token_is_anonymous(resolver) -> None:
    token = jwt.encode(
        {"sub": "alice", "exp": utcnow() - timedelta(minutes=5)},
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    assert resolver.resolve(token) == Anonymous()


def test_wrong_signature_is_anonymous(resolver) -> None:
    token = jwt.encode({"sub": "alice"}, "another-secret", algorithm=settings.jwt_algorithm)
    assert resolver.resolve(token) == Anonymous()


def test_token_without_subject_is_anonymous(resolver) -> None:
    token = jwt.encode({"scope": "read"}, settings.secret_key, algorithm=settings.jwt_algorithm)
    assert resolver.resolve(token) == Anonymous()


def test_session_token_ignored_when_slots_disabled(resolver) -> None:
    assert resolver.resolve(None, anonymous_session="tab-1") == Anonymous()


def test_session_slots_widen_anonymous_key() -> None:
    resolver = IdentityResolver(session_slots=True, max_session_length=16)

    identity = resolver.resolve(None, anonymous_session="tab-1")

    assert identity == Anonymous(session="tab-1")
    assert identity.voter_key == "anonymous:tab-1"
    assert resolver.resolve(None, anonymous_session="x" * 17) == Anonymous()
    assert resolver.resolve(None, anonymous_session="   ") == Anonymous()


def test_authenticated_wins_over_session_token() -> None:
    resolver = IdentityResolver(session_slots=True)
    identity = resolver.resolve(create_access_token("bob"), anonymous_session="tab-1")
    assert identity == Authenticated(user_id="bob")
