"""Tests for src.logging_config."""

import logging

import pytest

from src.logging_config import LOG_FILENAME, setup_logging


@pytest.fixture
def configure(monkeypatch):
    """Run setup_logging against a root logger stripped of its handlers.

    Handlers added by setup_logging are closed and the root level restored
    afterwards.
    """
    root = logging.getLogger()
    level = root.level
    added = []

    def _configure(*args, **kwargs):
        monkeypatch.setattr(root, "handlers", [])
        log_file = setup_logging(*args, **kwargs)
        added.extend(root.handlers)
        return log_file, list(root.handlers)

    yield _configure
    for handler in added:
        handler.close()
    root.setLevel(level)


class TestSetupLogging:
    def test_writes_to_log_dir(self, configure, tmp_path):
        log_file, handlers = configure("WARNING", log_dir=tmp_path / "logs")
        assert log_file == tmp_path / "logs" / LOG_FILENAME
        assert log_file.exists()
        assert len(handlers) == 2

    def test_file_gets_debug_console_gets_level(self, configure, tmp_path):
        _, handlers = configure("warning", log_dir=tmp_path)
        assert sorted(h.level for h in handlers) == [logging.DEBUG, logging.WARNING]

    def test_unknown_level_falls_back_to_info(self, configure, tmp_path):
        _, handlers = configure("chatty", log_dir=tmp_path)
        assert logging.INFO in {h.level for h in handlers}

    def test_second_call_is_noop(self, configure, tmp_path):
        configure(log_dir=tmp_path)
        assert setup_logging(log_dir=tmp_path) is None
        assert len(logging.getLogger().handlers) == 2

    def test_debug_records_reach_file(self, configure, tmp_path):
        log_file, handlers = configure("ERROR", log_dir=tmp_path)
        logging.getLogger("src.economy.ledger").debug("tick credited 5")
        for handler in handlers:
            handler.flush()
        assert "tick credited 5" in log_file.read_text()
