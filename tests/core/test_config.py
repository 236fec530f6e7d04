"""Unit tests for src/core/config.py"""

import logging

import pytest

from src.core.config import Settings, configure_logging, load_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ["DATABASE_URL", "SQL_ECHO", "LOG_LEVEL"]:
        monkeypatch.delenv(f"OPAQUE_CHESS_{name}", raising=False)
    assert load_settings() == Settings()


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPAQUE_CHESS_DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.setenv("OPAQUE_CHESS_SQL_ECHO", "true")
    monkeypatch.setenv("OPAQUE_CHESS_LOG_LEVEL", "debug")
    settings = load_settings()
    assert settings.database_url == "sqlite:///:memory:"
    assert settings.sql_echo is True
    assert settings.log_level == "DEBUG"


def test_configure_logging_sets_root_level() -> None:
    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging(Settings(log_level="DEBUG"))
        assert root.level == logging.DEBUG
        configure_logging(Settings(log_level="NOT_A_LEVEL"))
        assert root.level == logging.INFO
    finally:
        root.setLevel(previous)
