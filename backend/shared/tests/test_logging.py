import json
import logging
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from unittest.mock import patch

import pytest
import structlog

from shared.logging import _serialize_enums, resolve_json_mode, resolve_log_level, setup_logging


@pytest.fixture(autouse=True)
def _cleanup_root_logger():
    """Close and remove all handlers from the root logger after each test."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        handler.close()
        root.removeHandler(handler)


@pytest.fixture(autouse=True)
def _allow_file_logging():
    """Disable the _is_test guard so logging tests can create real file handlers."""
    with patch("shared.logging._is_test", return_value=False):
        yield


@pytest.fixture(autouse=True)
def _clean_log_env(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_FORMAT", raising=False)


class TestSetupLogging:
    def test_configures_stdout_handler(self):
        setup_logging()
        root = logging.getLogger()

        assert root.level == logging.INFO
        assert len(root.handlers) == 1

        handler = root.handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter)

    def test_configures_file_handler_in_log_dir(self, tmp_path):
        log_dir = tmp_path / "games"
        setup_logging(log_dir=log_dir)
        root = logging.getLogger()

        assert len(root.handlers) == 2

        file_handler = root.handlers[1]
        assert isinstance(file_handler, logging.FileHandler)
        assert Path(file_handler.baseFilename).parent == log_dir

    def test_log_file_has_datetime_in_name(self, tmp_path):
        fixed_time = datetime(2025, 3, 15, 10, 30, 45, tzinfo=UTC)
        with patch("shared.logging.datetime") as mock_dt:
            mock_dt.now.return_value = fixed_time
            log_path = setup_logging(log_dir=tmp_path / "games")

        assert log_path is not None
        assert log_path.name == "2025-03-15_10-30-45.log"

    def test_returns_none_without_log_dir(self):
        assert setup_logging() is None

    def test_no_file_handler_under_test_guard(self, tmp_path):
        with patch("shared.logging._is_test", return_value=True):
            result = setup_logging(log_dir=tmp_path / "games")

        assert result is None
        assert not (tmp_path / "games").exists()

    def test_writes_to_file(self, tmp_path):
        log_path = setup_logging(log_dir=tmp_path / "games")

        structlog.get_logger("test.writes_to_file").info("round recorded", bid=100)

        assert log_path is not None
        assert "round recorded" in log_path.read_text()

    def test_creates_nested_log_directory(self, tmp_path):
        log_dir = tmp_path / "nested" / "dir"
        setup_logging(log_dir=str(log_dir))
        assert log_dir.is_dir()

    def test_clears_existing_handlers_on_repeated_calls(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_explicit_level(self):
        setup_logging(level=logging.DEBUG)
        assert logging.getLogger().level == logging.DEBUG

    def test_log_level_from_env(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")
        setup_logging()
        assert logging.getLogger().level == logging.WARNING

    def test_json_mode_produces_valid_json(self, tmp_path):
        log_path = setup_logging(log_dir=tmp_path / "games", log_format="json")

        structlog.contextvars.bind_contextvars(game_id="friday")
        structlog.get_logger("test.json").info("game finished", winner=_Team.A)
        structlog.contextvars.clear_contextvars()

        assert log_path is not None
        parsed = json.loads(log_path.read_text().strip().splitlines()[0])
        assert parsed["event"] == "game finished"
        assert parsed["game_id"] == "friday"
        assert parsed["winner"] == "A"

    def test_console_mode_produces_readable_output(self, tmp_path):
        log_path = setup_logging(log_dir=tmp_path / "games", log_format="console")

        structlog.get_logger("test.console").info("dealer changed")

        assert log_path is not None
        assert "dealer changed" in log_path.read_text()


class TestResolveOptions:
    def test_explicit_format_wins_over_env(self, monkeypatch):
        monkeypatch.setenv("LOG_FORMAT", "json")
        assert resolve_json_mode("console") is False

    def test_format_from_env(self, monkeypatch):
        monkeypatch.setenv("LOG_FORMAT", "JSON")
        assert resolve_json_mode() is True

    def test_invalid_format_raises(self):
        with pytest.raises(ValueError, match="Invalid LOG_FORMAT"):
            resolve_json_mode("xml")

    def test_level_defaults_to_info(self):
        assert resolve_log_level() == logging.INFO

    def test_explicit_level_is_case_insensitive(self):
        assert resolve_log_level("debug") == logging.DEBUG

    def test_invalid_level_raises(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "bogus")
        with pytest.raises(ValueError, match="Invalid LOG_LEVEL"):
            resolve_log_level()


class _Team(Enum):
    A = "A"
    B = "B"


class TestSerializeEnums:
    def test_replaces_enum_with_value(self):
        result = _serialize_enums(None, "", {"winner": _Team.B, "msg": "hello"})
        assert result == {"winner": "B", "msg": "hello"}

    def test_replaces_enum_inside_dict_value(self):
        result = _serialize_enums(None, "", {"totals": {_Team.A.value: 10, "team": _Team.A}})
        assert result["totals"] == {"A": 10, "team": "A"}

    def test_replaces_enum_inside_list_value(self):
        result = _serialize_enums(None, "", {"teams": (_Team.A, _Team.B, 3)})
        assert result["teams"] == ["A", "B", 3]

    def test_leaves_non_enum_values_unchanged(self):
        event_dict = {"count": 42, "name": "test"}
        assert _serialize_enums(None, "", event_dict) == {"count": 42, "name": "test"}
