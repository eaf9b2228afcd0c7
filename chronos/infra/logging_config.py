"""
Logging configuration for the chronos package.

Library modules only create loggers under the "chronos" namespace; the
application (or the CLI) decides where records go by calling setup_logging().
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

LOGGER_NAME = "chronos"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Fixed once per process so every daily file shares the same suffix
_PROCESS_START_TIME: Optional[str] = None


class DailyRotatingFileHandler(logging.FileHandler):
    """
    File handler writing one file per calendar day.

    File name: <log_dir>/chronos_YYYYMMDD_<START_HHMMSS>.log
    START_HHMMSS is the process start time; only the date part changes.
    """

    def __init__(self, log_dir: str = "logs", encoding: str = "utf-8"):
        global _PROCESS_START_TIME

        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        if _PROCESS_START_TIME is None:
            _PROCESS_START_TIME = datetime.now().strftime("%H%M%S")
        self._start_hhmmss = _PROCESS_START_TIME

        self._current_date = datetime.now().strftime("%Y%m%d")
        super().__init__(self._log_path(self._current_date), mode="a", encoding=encoding)

    def _log_path(self, date_str: str) -> str:
        return str(self.log_dir / f"chronos_{date_str}_{self._start_hhmmss}.log")

    def emit(self, record: logging.LogRecord) -> None:
        current_date = datetime.now().strftime("%Y%m%d")
        if current_date != self._current_date:
            self.close()
            self.baseFilename = self._log_path(current_date)
            self._current_date = current_date
            self.stream = self._open()

        super().emit(record)


def setup_logging(log_level: str = "INFO", log_dir: Optional[str] = None) -> logging.Logger:
    """
    Configure the "chronos" logger and return it.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL (unknown -> INFO)
        log_dir: Also write daily log files into this directory

    Returns:
        The configured logger
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)
    logger.propagate = False

    # Repeated calls must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir:
        file_handler = DailyRotatingFileHandler(log_dir=log_dir)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger.debug(f"Logging to {file_handler.baseFilename}")

    return logger
