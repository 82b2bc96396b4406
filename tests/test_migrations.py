# tests/test_migrations.py
import io
from pathlib import Path

from alembic import command
from alembic.config import Config

from perspective_ledger.db.session import Base

MIGRATIONS_DIR = Path(__file__).resolve().parents[1] / "migrations"


def test_offline_upgrade_emits_ledger_schema() -> None:
    buffer = io.StringIO()
    cfg = Config(str(MIGRATIONS_DIR / "alembic.ini"), output_buffer=buffer)
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    cfg.set_main_option("sqlalchemy.url", "sqlite://")

    command.upgrade(cfg, "head", sql=True)

    ddl = buffer.getvalue()
    for table in Base.metadata.tables:
        assert f"CREATE TABLE {table}" in ddl
    assert "uq_perspective_vote_key" in ddl
    assert "uq_validation_key" in ddl
