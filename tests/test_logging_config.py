"""
Tests for logging_config module.
"""

import logging

import pytest

from chronos.infra.logging_config import (
    DailyRotatingFileHandler,
    LOGGER_NAME,
    setup_logging,
)


@pytest.fixture(autouse=True)
def reset_chronos_logger():
    """Leave the chronos logger without handlers after each test."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


class TestDailyRotatingFileHandler:

    def test_creates_log_directory(self, tmp_path):
        log_dir = tmp_path / "new_logs"
        assert not log_dir.exists()

        handler = DailyRotatingFileHandler(log_dir=str(log_dir))
        assert log_dir.exists()
        handler.close()

    def test_file_name_pattern(self, tmp_path):
        handler = DailyRotatingFileHandler(log_dir=str(tmp_path))
        handler.close()

        log_files = list(tmp_path.glob("chronos_*.log"))
        assert len(log_files) == 1
        # chronos_YYYYMMDD_HHMMSS.log
        _, date_part, time_part = log_files[0].stem.split("_")
        assert len(date_part) == 8 and date_part.isdigit()
        assert len(time_part) == 6 and time_part.isdigit()

    def test_emits_record(self, tmp_path):
        handler = DailyRotatingFileHandler(log_dir=str(tmp_path))
        handler.setFormatter(logging.Formatter("%(message)s"))

        record = logging.LogRecord(
            name="chronos.test",
            level=logging.INFO,
            pathname="",
            lineno=0,
            msg="member a:4400 marked inactive",
            args=(),
            exc_info=None,
        )
        handler.emit(record)
        handler.close()

        log_file = next(tmp_path.glob("chronos_*.log"))
        assert "member a:4400 marked inactive" in log_file.read_text(encoding="utf-8")

    def test_rotates_on_date_change(self, tmp_path):
        handler = DailyRotatingFileHandler(log_dir=str(tmp_path))
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler._current_date = "19990101"

        handler.emit(logging.makeLogRecord({"msg": "after midnight"}))
        handler.close()

        assert handler._current_date != "19990101"
        assert "19990101" not in handler.baseFilename


class TestSetupLogging:

    def test_returns_chronos_logger(self):
        logger = setup_logging("DEBUG")

        assert logger.name == "chronos"
        assert logger.level == logging.DEBUG
        assert logger.propagate is False

    def test_unknown_level_falls_back_to_info(self):
        assert setup_logging("chatty").level == logging.INFO

    def test_repeated_calls_do_not_stack_handlers(self):
        setup_logging("INFO")
        logger = setup_logging("INFO")

        assert len(logger.handlers) == 1

    def test_file_handler_added_with_log_dir(self, tmp_path):
        logger = setup_logging("INFO", log_dir=str(tmp_path))

        assert any(isinstance(h, DailyRotatingFileHandler) for h in logger.handlers)

    def test_child_loggers_reach_handlers(self, tmp_path):
        setup_logging("INFO", log_dir=str(tmp_path))

        logging.getLogger("chronos.cluster.selector").warning("failing over")
        for handler in logging.getLogger(LOGGER_NAME).handlers:
            handler.flush()

        log_file = next(tmp_path.glob("chronos_*.log"))
        assert "chronos.cluster.selector - WARNING - failing over" in log_file.read_text(encoding="utf-8")
