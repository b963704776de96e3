"""Tests for settings and logging setup."""

import logging

import pytest

from spendlens.config import DEFAULT_PROVIDERS, load_settings
from spendlens.domain.errors import ValidationError
from spendlens.logging_setup import _parse_level, get_logger


def test_defaults():
    settings = load_settings({})

    assert settings.database_path is None
    assert settings.timezone == "UTC"
    assert settings.providers == DEFAULT_PROVIDERS
    assert settings.mock_seed is None
    assert settings.log_level == "WARNING"


def test_environment_overrides():
    settings = load_settings(
        {
            "SPENDLENS_DB_PATH": "/tmp/x.db",
            "SPENDLENS_TIMEZONE": "Europe/London",
            "SPENDLENS_PROVIDERS": " Amex , ",
            "SPENDLENS_MOCK_SEED": "42",
            "SPENDLENS_LOG_LEVEL": "debug",
        }
    )

    assert settings.database_path == "/tmp/x.db"
    assert settings.timezone == "Europe/London"
    assert settings.providers == ("amex",)
    assert settings.mock_seed == 42
    assert settings.log_level == "debug"


def test_bad_seed():
    with pytest.raises(ValidationError, match="SPENDLENS_MOCK_SEED"):
        load_settings({"SPENDLENS_MOCK_SEED": "abc"})


def test_parse_level(monkeypatch):
    monkeypatch.delenv("SPENDLENS_LOG_LEVEL", raising=False)
    assert _parse_level("info") == logging.INFO
    assert _parse_level("10") == 10
    assert _parse_level("bogus") == logging.WARNING
    assert _parse_level(None) == logging.WARNING

    monkeypatch.setenv("SPENDLENS_LOG_LEVEL", "ERROR")
    assert _parse_level(None) == logging.ERROR


def test_get_logger_is_namespaced():
    logger = get_logger("spendlens.domain.test")

    assert logger.name == "spendlens.domain.test"
    assert logging.getLogger("spendlens").handlers
