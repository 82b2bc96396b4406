# tests/test_db_session.py
from sqlalchemy.orm import Session

from perspective_ledger.db import session as db_session_module


def test_get_db_yields_and_closes_session(monkeypatch) -> None:
    closed = []

    class _TrackingSession(Session):
        def close(self) -> None:
            closed.append(True)
            super().close()

    monkeypatch.setattr(db_session_module, "SessionLocal", _TrackingSession)

    dependency = db_session_module.get_db()
    session = next(dependency)
    assert isinstance(session, Session)
    dependency.close()

    assert closed == [True]
