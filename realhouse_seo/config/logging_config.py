# realhouse_seo/config/logging_config.py

"""Per-run logging for the realhouse_seo command-line tools.

Every CLI invocation writes a fresh ``logs/run_YYYYMMDD_HHMMSS.log``
holding DEBUG output from all ``realhouse_seo.*`` loggers (rule
decisions, ranking sizes, store loads). The terminal only sees
warnings, or INFO and up when ``verbose`` is set.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from realhouse_seo.config.settings import Settings

ROOT_LOGGER_NAME = "realhouse_seo"

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(funcName)s:%(lineno)d | %(message)s"
)
_CONSOLE_FORMAT = "%(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _handler(
    handler: logging.Handler, level: int, fmt: str
) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=_DATE_FORMAT))
    return handler


def setup_logging(
    logs_dir: Path | None = None, verbose: bool = False
) -> Path:
    """Attach the run-file and stderr handlers to the package logger.

    Args:
        logs_dir: Directory for the run log. Defaults to
            :attr:`Settings.LOGS_DIR`.
        verbose: Lower the stderr threshold from WARNING to INFO.

    Returns:
        Path of this run's log file. When handlers are already attached
        (repeated calls in one process) nothing is added and the path
        is returned unused.
    """
    logs_dir = logs_dir or Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / f"run_{datetime.now():%Y%m%d_%H%M%S}.log"

    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.setLevel(logging.DEBUG)
    if package_logger.handlers:
        return log_file

    package_logger.addHandler(
        _handler(
            logging.FileHandler(log_file, encoding="utf-8"),
            logging.DEBUG,
            _FILE_FORMAT,
        )
    )
    package_logger.addHandler(
        _handler(
            logging.StreamHandler(sys.stderr),
            logging.INFO if verbose else logging.WARNING,
            _CONSOLE_FORMAT,
        )
    )
    package_logger.debug("Run log: %s", log_file)
    return log_file
