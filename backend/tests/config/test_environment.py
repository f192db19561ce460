import pytest
from unittest.mock import patch

from tvtracker.config.environment import Settings, get_settings

ENV_KEYS = (
    "JWT_SECRET_KEY", "JWT_ALGORITHM", "JWT_ACCESS_TOKEN_EXPIRE_MINUTES", "BCRYPT_ROUNDS",
    "DATABASE_URL", "USE_SQLITE", "SQLITE_PATH", "DB_USER", "DB_PASSWORD", "DB_HOST", "DB_PORT", "DB_NAME",
    "ENVIRONMENT", "LOG_DIR", "CORS_ORIGINS", "ADMIN_EMAIL", "ADMIN_USERNAME", "ADMIN_PASSWORD",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    # keep a developer's .env out of the picture
    with patch("tvtracker.config.environment.load_dotenv"):
        yield


def test_missing_secret_key():
    with pytest.raises(ValueError, match="JWT_SECRET_KEY"):
        get_settings()


def test_sqlite_settings(monkeypatch):
    monkeypatch.setenv("JWT_SECRET_KEY", "secret")
    monkeypatch.setenv("USE_SQLITE", "true")
    monkeypatch.setenv("SQLITE_PATH", "/tmp/tracker.db")
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:3000, http://localhost:5173")

    settings = get_settings()

    assert settings.database_url == "sqlite:////tmp/tracker.db"
    assert settings.jwt_access_token_expire_minutes == 7 * 24 * 60
    assert settings.cors_origins == ["http://localhost:3000", "http://localhost:5173"]
    assert settings.admin_email is None
    assert not settings.is_production


def test_postgres_settings(monkeypatch):
    monkeypatch.setenv("JWT_SECRET_KEY", "secret")
    monkeypatch.setenv("DB_USER", "tracker")
    monkeypatch.setenv("DB_PASSWORD", "pw")
    monkeypatch.setenv("DB_HOST", "db")
    monkeypatch.setenv("ENVIRONMENT", "production")

    settings = get_settings()

    assert settings.database_url == "postgresql://tracker:pw@db:5432/tv_tracker"
    assert settings.is_production


def test_postgres_requires_credentials(monkeypatch):
    monkeypatch.setenv("JWT_SECRET_KEY", "secret")

    with pytest.raises(ValueError, match="DB_USER"):
        get_settings()


def test_database_url_wins(monkeypatch):
    monkeypatch.setenv("JWT_SECRET_KEY", "secret")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.setenv("USE_SQLITE", "true")

    assert get_settings().database_url == "sqlite:///:memory:"


def test_settings_defaults():
    settings = Settings(jwt_secret_key="secret")

    assert settings.jwt_algorithm == "HS256"
    assert settings.bcrypt_rounds == 12
    assert settings.environment == "development"
