"""
Tests for settings and logging configuration.
"""

import logging

import pytest

from fetch_cache.config import Settings, _split_origins
from fetch_cache.logging_config import configure_logging, parse_log_level


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Keep logging configured by these tests from leaking into others."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_split_origins():
    """ALLOWED_ORIGINS is a comma separated list."""
    assert _split_origins("https://a.test, https://b.test,,") == frozenset(
        {"https://a.test", "https://b.test"}
    )
    assert _split_origins("") == frozenset()


@pytest.mark.parametrize(
    "overrides",
    [
        {"cache_ttl": 0},
        {"origin_timeout": -1.0},
        {"log_format": "xml"},
    ],
)
def test_invalid_settings(overrides):
    """Invalid settings fail at construction."""
    with pytest.raises(ValueError):
        Settings(**overrides)


@pytest.mark.parametrize(
    "name, level",
    [
        ("debug", logging.DEBUG),
        ("INFO", logging.INFO),
        ("Warn", logging.WARNING),
        ("warning", logging.WARNING),
        (" error ", logging.ERROR),
    ],
)
def test_parse_log_level(name, level):
    """Level names are case-insensitive."""
    assert parse_log_level(name) == level


def test_parse_log_level_unknown():
    """Unknown names are rejected."""
    with pytest.raises(ValueError):
        parse_log_level("loud")


def test_configure_logging_falls_back(capsys):
    """A malformed level is logged and the default level is used."""
    level = configure_logging("loud")

    assert level == logging.DEBUG
    assert "failed_to_parse_log_level" in capsys.readouterr().out


def test_configure_logging_json():
    """The JSON renderer honours the requested level."""
    level = configure_logging("info", "json")

    assert level == logging.INFO
    assert logging.getLogger().level == logging.INFO
