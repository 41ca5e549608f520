"""Tests for logging configuration."""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from gred.gred_logging import setup_logging
from gred.gred_settings import GredSettings


@pytest.fixture
def root_logger():
    """Restore the root logger's handlers and level after a test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root

    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()

    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)

    root.setLevel(level)


class TestSetupLogging:
    """Test log handler installation."""

    def test_log_file(self, root_logger, tmp_path):
        """Test that GRED_LOG installs a rotating file handler."""
        log_file = tmp_path / "g.log"
        setup_logging(GredSettings(log_file=str(log_file), log_level=logging.INFO))

        handlers = [h for h in root_logger.handlers if isinstance(h, RotatingFileHandler)]
        assert len(handlers) == 1
        assert root_logger.level == logging.INFO

        logging.getLogger("PatchApplier").info("applied %d lines", 3)
        logging.getLogger("PatchApplier").debug("not written")
        handlers[0].flush()

        text = log_file.read_text(encoding='utf-8')
        assert " - PatchApplier - INFO - applied 3 lines" in text
        assert "not written" not in text

    def test_no_log_file(self, root_logger):
        """Test that without GRED_LOG records are discarded."""
        before = root_logger.handlers[:]
        setup_logging(GredSettings())

        added = [h for h in root_logger.handlers if h not in before]
        assert len(added) == 1
        assert isinstance(added[0], logging.NullHandler)
        assert not any(isinstance(h, RotatingFileHandler) for h in root_logger.handlers)
