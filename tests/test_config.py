"""Tests for settings and logging setup."""

import logging

import pytest
from pydantic import ValidationError

from agentflow.config import Settings, get_settings, reset_settings
from agentflow.log import configure_logging


@pytest.fixture(autouse=True)
def fresh_settings():
    reset_settings()
    yield
    reset_settings()


def test_settings_defaults(monkeypatch):
    """Test default values."""
    monkeypatch.delenv("AGENTFLOW_LOG_LEVEL", raising=False)
    monkeypatch.delenv("AGENTFLOW_STORAGE_DIR", raising=False)

    settings = Settings()

    assert settings.log_level == "INFO"
    assert settings.storage_dir == ".agentflow/workflows"


def test_settings_from_environment(monkeypatch):
    """Test that AGENTFLOW_ variables override defaults."""
    monkeypatch.setenv("AGENTFLOW_LOG_LEVEL", "debug")

    assert get_settings().log_level == "DEBUG"
    assert get_settings() is get_settings()


def test_settings_reject_unknown_log_level(monkeypatch):
    """Test validation of the log level."""
    monkeypatch.setenv("AGENTFLOW_LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        Settings()


def test_configure_logging(monkeypatch):
    """Test that the agentflow logger gets one handler at the configured level."""
    monkeypatch.setenv("AGENTFLOW_LOG_LEVEL", "WARNING")

    configure_logging()
    configure_logging()

    logger = logging.getLogger("agentflow")
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1

    configure_logging("DEBUG")
    assert logger.level == logging.DEBUG
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
