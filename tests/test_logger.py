"""Tests for vibecss/log.py - structured logging setup."""

import json
import logging

import pytest

import vibecss.log as log_mod
from vibecss.log import (
    LOGGER_NAME,
    _JSONFormatter,
    _TextFormatter,
    configure_logging,
    log_pass,
    pass_timer,
    set_level,
)


def make_record(message="generate_complete", data=None, level=logging.INFO):
    record = logging.LogRecord("vibecss.runner", level, __file__, 1, message, None, None)
    if data is not None:
        record.data = data
    return record


@pytest.fixture
def unconfigured(monkeypatch):
    """Let configure_logging run for real, then restore the test handler."""
    root = logging.getLogger(LOGGER_NAME)
    saved = list(root.handlers)
    monkeypatch.setattr(log_mod, "_CONFIGURED", False)
    for name in ("VIBECSS_LOG_LEVEL", "VIBECSS_LOG_FORMAT", "VIBECSS_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in saved:
        root.addHandler(handler)


# ============================================
# Formatters
# ============================================

class TestFormatters:
    """JSON and text formatters."""

    def test_json_with_data(self):
        line = _JSONFormatter().format(make_record(data={"total": 3, "path": "src"}))
        entry = json.loads(line)
        assert entry["level"] == "INFO"
        assert entry["event"] == "generate_complete"
        assert entry["data"] == {"total": 3, "path": "src"}
        assert "timestamp" in entry

    def test_json_without_data(self):
        entry = json.loads(_JSONFormatter().format(make_record("hello")))
        assert "data" not in entry

    def test_json_non_serializable_values(self):
        entry = json.loads(_JSONFormatter().format(make_record(data={"classes": {"vibe-flex"}})))
        assert entry["data"]["classes"] == str({"vibe-flex"})

    def test_text_with_data(self):
        text = _TextFormatter().format(make_record(data={"total": 3, "unknown": 1}))
        assert text == "generate_complete total=3 unknown=1"

    def test_text_plain(self):
        assert _TextFormatter().format(make_record("plain")) == "plain"


# ============================================
# configure_logging
# ============================================

class TestConfigureLogging:
    """Handler installation and environment overrides."""

    def test_defaults(self, unconfigured):
        root = configure_logging()
        assert root is unconfigured
        assert root.level == logging.INFO
        assert root.propagate is False
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, _TextFormatter)

    def test_idempotent(self, unconfigured):
        configure_logging()
        configure_logging(level="DEBUG")
        assert len(unconfigured.handlers) == 1
        assert unconfigured.level == logging.INFO

    def test_force_reconfigures(self, unconfigured):
        configure_logging()
        configure_logging(level="DEBUG", fmt="json", force=True)
        assert len(unconfigured.handlers) == 1
        assert unconfigured.level == logging.DEBUG
        assert isinstance(unconfigured.handlers[0].formatter, _JSONFormatter)

    def test_environment(self, unconfigured, monkeypatch, tmp_path):
        log_file = tmp_path / "vibecss.log"
        monkeypatch.setenv("VIBECSS_LOG_LEVEL", "warning")
        monkeypatch.setenv("VIBECSS_LOG_FORMAT", "JSON")
        monkeypatch.setenv("VIBECSS_LOG_FILE", str(log_file))

        root = configure_logging()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 2
        assert all(isinstance(h.formatter, _JSONFormatter) for h in root.handlers)

        log_pass("generate_failed", {"error": "disk full"}, level=logging.WARNING)
        for handler in root.handlers:
            handler.flush()
        entry = json.loads(log_file.read_text(encoding="utf-8").strip())
        assert entry["event"] == "generate_failed"
        assert entry["data"] == {"error": "disk full"}

    def test_unknown_level_falls_back(self, unconfigured):
        assert configure_logging(level="LOUD").level == logging.INFO

    def test_set_level(self):
        set_level(logging.DEBUG)
        assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG


# ============================================
# log_pass / pass_timer
# ============================================

class TestPassLogging:
    """Pass summaries and timing."""

    def test_debug_by_default(self, capsys):
        log_pass("scan_complete", {"total": 2})
        assert "scan_complete" not in capsys.readouterr().out

    def test_visible_with_verbose(self, capsys):
        set_level(logging.DEBUG)
        log_pass("scan_complete", {"total": 2})
        assert "scan_complete" in capsys.readouterr().out

    def test_timer(self):
        with pass_timer() as timer:
            sum(range(1000))
        assert timer.ms >= 0.0

    def test_timer_slots(self):
        timer = pass_timer()
        with pytest.raises(AttributeError):
            timer.extra = 1
