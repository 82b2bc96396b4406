# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator

import pytest

os.environ.setdefault("PYTEST_RUNNING", "true")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from perspective_ledger.core.security import create_access_token
from perspective_ledger.db.session import Base
from perspective_ledger.db.session import get_db as app_get_session
from perspective_ledger.main import app as fastapi_app
from perspective_ledger.models import Node, Perspective

TEST_DB_URL = "sqlite://"


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture()
def db_session(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def node(db_session: Session) -> Node:
    """Create node ``n1`` at version 1."""
    node = Node(id="n1", question="Should cities price congestion?", version=1)
    db_session.add(node)
    db_session.commit()
    return node


@pytest.fixture()
def perspectives(db_session: Session) -> list[Perspective]:
    rows = [
        Perspective(id="p1", name="Economic", description=None),
        Perspective(id="p2", name="Equity", description=None),
    ]
    db_session.add_all(rows)
    db_session.commit()
    return rows


@pytest.fixture()
def advance_version(db_session: Session):
    """Return a helper that bumps a node's content version the way the catalog does."""

    def _advance(node: Node) -> int:
        node.version = node.version + 1
        db_session.commit()
        return node.version

    return _advance


def bearer(user_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture()
def alice_headers() -> dict[str, str]:
    """Authorization headers for user ``alice``."""
    return bearer("alice")


@pytest.fixture()
def bob_headers() -> dict[str, str]:
    """Authorization headers for user ``bob``."""
    return bearer("bob")
