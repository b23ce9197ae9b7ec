"""
Tests for the logger factory
"""
import logging

from ipinvite.core.logging import get_logger, set_log_level


def test_no_duplicate_handlers():
    first = get_logger("ipinvite.tests.duplicate")
    second = get_logger("ipinvite.tests.duplicate")
    assert first is second
    assert len(second.handlers) == 1


def test_log_level_and_file(tmp_path):
    log_file = tmp_path / "logs" / "ipinvite.log"
    logger = get_logger("ipinvite.tests.file", log_level="debug", log_file=log_file)
    assert logger.level == logging.DEBUG

    logger.debug("written to file")
    for handler in logger.handlers:
        handler.flush()
    assert "written to file" in log_file.read_text()


def test_set_log_level():
    logger = get_logger("ipinvite.tests.level", log_level="WARNING")
    set_log_level("info")
    assert logger.level == logging.INFO
    set_log_level("not a level")
    assert logger.level == logging.WARNING
