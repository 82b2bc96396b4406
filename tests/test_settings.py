# tests/test_settings.py
from perspective_ledger.core.settings import Settings


def _settings(**env) -> Settings:
    return Settings(SECRET_KEY="test-secret-key", **env)


def test_database_url_used_verbatim() -> None:
    url = "postgresql+psycopg://ledger@db/ledger"
    assert _settings(DATABASE_URL=url).effective_database_url == url


def test_testing_database_override() -> None:
    settings = _settings(
        DATABASE_URL="sqlite:///./ledger.db",
        TEST_DATABASE_URL="sqlite://",
        USE_TEST_DATABASE=True,
    )
    assert settings.effective_database_url == "sqlite://"


def test_testing_database_needs_url() -> None:
    settings = _settings(DATABASE_URL="sqlite:///./ledger.db", USE_TEST_DATABASE=True)
    assert settings.effective_database_url == "sqlite:///./ledger.db"
