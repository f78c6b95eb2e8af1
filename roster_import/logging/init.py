from __future__ import annotations

import logging
import sys

"""Logging initialization with labeled prefixes.

Console output uses one label per line (INFO|WARN|ERROR|SUMMARY) so batch
runs can be grepped. Parser modules log through logging.getLogger(__name__)
under the "roster_import" namespace and inherit this handler; with --debug
their lines also name the emitting module ("DEBUG [parsing.grid] ...").
"""

__all__ = [
    "setup_logging",
    "get_logger",
    "enable_debug",
    "log_summary",
    "reset_logging",
    "LOGGER_NAME",
]

LOGGER_NAME = "roster_import"

# between INFO=20 and WARNING=30
SUMMARY_LEVEL = 25

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Formatter producing "<LABEL> <message>" lines."""

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        if record.levelno == logging.DEBUG:
            source = record.name.removeprefix(LOGGER_NAME + ".")
            return f"{label} [{source}] {record.getMessage()}"
        return f"{label} {record.getMessage()}"


def setup_logging() -> logging.Logger:
    """Configure the application logger (idempotent).

    Returns:
        The "roster_import" logger with a single stdout handler
    """
    global _logger
    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)

    # 重複出力を避けるため既存ハンドラを除去
    for old in logger.handlers[:]:
        logger.removeHandler(old)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(LabeledFormatter())
    logger.addHandler(console)
    logger.propagate = False

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    return _logger or setup_logging()


def enable_debug() -> None:
    """Lower the application logger and its handlers to DEBUG."""
    logger = get_logger()
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers:
        handler.setLevel(logging.DEBUG)
    logger.debug("debug mode enabled")


def log_summary(message: str) -> None:
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Forget the configured logger (tests re-bind stdout between runs)."""
    global _logger
    _logger = None
