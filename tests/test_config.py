"""Tests for Settings validation and logging setup."""
import logging

import pytest
from pydantic import ValidationError as SettingsError

from waasha.config import Settings
from waasha.core.logging_config import configure_logging

STRONG_KEY = "a-perfectly-fine-secret-key-123456"


def test_defaults(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("BCRYPT_ROUNDS", raising=False)

    settings = Settings(_env_file=None, SECRET_KEY=STRONG_KEY)

    assert settings.ACCESS_TOKEN_EXPIRE_DAYS == 7
    assert settings.PASSWORD_MIN_LENGTH == 6
    assert settings.BCRYPT_ROUNDS == 12
    assert settings.ALGORITHM == "HS256"
    assert settings.is_sqlite


def test_secret_key_is_required(monkeypatch):
    monkeypatch.delenv("SECRET_KEY", raising=False)

    with pytest.raises(SettingsError):
        Settings(_env_file=None)


def test_short_secret_key_is_rejected():
    with pytest.raises(SettingsError):
        Settings(_env_file=None, SECRET_KEY="short")


def test_placeholder_key_is_rejected_in_production():
    with pytest.raises(SettingsError):
        Settings(_env_file=None, SECRET_KEY="dev-secret-key-change-me", ENVIRONMENT="PROD")

    # tolerated outside production
    assert Settings(_env_file=None, SECRET_KEY="dev-secret-key-change-me", ENVIRONMENT="DEV")


def test_bcrypt_rounds_bounds():
    with pytest.raises(SettingsError):
        Settings(_env_file=None, SECRET_KEY=STRONG_KEY, BCRYPT_ROUNDS=3)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_logging_installs_single_stdout_handler(restore_root_logger):
    settings = Settings(_env_file=None, SECRET_KEY=STRONG_KEY, LOG_LEVEL="debug")

    configure_logging(settings)
    configure_logging(settings)

    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_configure_logging_falls_back_to_info(restore_root_logger):
    settings = Settings(_env_file=None, SECRET_KEY=STRONG_KEY, LOG_LEVEL="chatty")

    configure_logging(settings)

    assert restore_root_logger.level == logging.INFO
