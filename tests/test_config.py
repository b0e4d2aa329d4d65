import importlib.util
import logging

import pytest
from pydantic import ValidationError

from src.config import Settings
from src.shared.infrastructure.logging import CustomJsonFormatter


def test_defaults(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    settings = Settings(_env_file=None)

    assert settings.port == 3000
    assert settings.db_timeout_seconds == 30
    assert settings.classifier_timeout_seconds == 15
    assert settings.classifier_max_tokens == 10
    assert settings.cors_origins == ["http://localhost:8100"]
    assert settings.cors_trusted_suffix == ".azurewebsites.net"


def test_legacy_deepseek_variables_are_accepted(monkeypatch):
    monkeypatch.delenv("CLASSIFIER_API_KEY", raising=False)
    monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-legacy")
    monkeypatch.setenv("DEEPSEEK_BASE_URL", "https://openrouter.ai/api/v1")

    settings = Settings(_env_file=None)

    assert settings.classifier_api_key == "sk-legacy"
    assert settings.classifier_base_url == "https://openrouter.ai/api/v1"


def test_url_assembled_from_parts(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    settings = Settings(
        _env_file=None,
        db_user="api",
        db_password="p@ss",
        db_server="tickets.database.windows.net",
        db_database="tickets",
    )

    url = settings.sqlalchemy_url()

    assert url.drivername == "mssql+aioodbc"
    assert url.host == "tickets.database.windows.net"
    assert url.password == "p@ss"
    assert url.query["driver"] == "ODBC Driver 18 for SQL Server"
    assert url.query["Encrypt"] == "yes"


def test_database_url_wins():
    settings = Settings(_env_file=None, database_url="sqlite+aiosqlite:///x.db", db_server="ignored")

    assert settings.sqlalchemy_url() == "sqlite+aiosqlite:///x.db"


def test_unknown_environment_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, environment="qa")


def test_log_formatter_redacts_credentials():
    formatter = CustomJsonFormatter(environment="production")
    record = logging.LogRecord("src.accounts", logging.INFO, __file__, 1, "login", None, None)
    log_record = {}

    formatter.add_fields(log_record, record, {"contrasena": "secreta", "prompt_tokens": "12", "api_key": "k"})

    assert log_record["contrasena"] == "***REDACTED***"
    assert log_record["api_key"] == "***REDACTED***"
    assert log_record["prompt_tokens"] == "12"
    assert log_record["environment"] == "production"


def test_default_database_driver_is_installed(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    settings = Settings(_env_file=None)

    dialect, driver = settings.db_driver.split("+")

    assert dialect == "mssql"
    assert importlib.util.find_spec(driver) is not None
