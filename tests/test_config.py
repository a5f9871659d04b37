"""Tests for settings, data directory resolution and logging setup."""

import json
import logging
import sys
from pathlib import Path

import pytest

from coach_clipboard.config import Settings, default_data_dir
from coach_clipboard.logging_config import JSONFormatter, setup_logging
from coach_clipboard.storage.base import get_data_dir

ENV_VARS = (
    "COACH_CLIPBOARD_DATA_DIR",
    "COACH_CLIPBOARD_PERSIST",
    "COACH_CLIPBOARD_LOG_LEVEL",
    "COACH_CLIPBOARD_ID_MODE",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = Settings.from_env()
    assert settings.data_dir == default_data_dir()
    assert settings.persist is True
    assert settings.log_level == "INFO"
    assert settings.id_mode == "uuid"
    assert get_data_dir() == default_data_dir()


def test_environment_overrides(clean_env, tmp_path):
    clean_env.setenv("COACH_CLIPBOARD_DATA_DIR", str(tmp_path))
    clean_env.setenv("COACH_CLIPBOARD_PERSIST", "off")
    clean_env.setenv("COACH_CLIPBOARD_LOG_LEVEL", "debug")
    clean_env.setenv("COACH_CLIPBOARD_ID_MODE", " Sequential ")

    settings = Settings.from_env()
    assert settings.data_dir == Path(tmp_path)
    assert settings.persist is False
    assert settings.log_level == "DEBUG"
    assert settings.id_mode == "sequential"
    assert get_data_dir() == Path(tmp_path)


@pytest.mark.parametrize("value", ["1", "true", "YES", "on"])
def test_persist_truthy_values(clean_env, value):
    clean_env.setenv("COACH_CLIPBOARD_PERSIST", value)
    assert Settings.from_env().persist is True


def test_json_formatter():
    logger = logging.getLogger("coach_clipboard.test")
    record = logger.makeRecord(
        logger.name, logging.WARNING, __file__, 10, "team %s missing", ("team_1",), None,
        extra={"ctx_team_id": "team_1"},
    )
    entry = json.loads(JSONFormatter().format(record))
    assert entry["level"] == "WARNING"
    assert entry["logger"] == "coach_clipboard.test"
    assert entry["message"] == "team team_1 missing"
    assert entry["context"] == {"team_id": "team_1"}
    assert "exception" not in entry


def test_json_formatter_includes_exception():
    try:
        raise ValueError("bad date")
    except ValueError:
        record = logging.getLogger("x").makeRecord(
            "x", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
        )
    entry = json.loads(JSONFormatter().format(record))
    assert entry["exception"] == {"type": "ValueError", "message": "bad date"}


def test_setup_logging_configures_root_once(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)

    setup_logging("debug")
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, JSONFormatter)
    assert root.level == logging.DEBUG
    assert logging.getLogger("mcp").level == logging.WARNING

    setup_logging("error")
    assert len(root.handlers) == 1
    assert root.level == logging.DEBUG
