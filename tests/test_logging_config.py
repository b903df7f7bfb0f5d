# tests/test_logging_config.py

"""Tests for the per-run logging configuration."""

import logging
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from realhouse_seo.config.logging_config import (
    ROOT_LOGGER_NAME,
    setup_logging,
)


def _stream_handlers(root_logger: logging.Logger) -> list[logging.Handler]:
    return [
        h
        for h in root_logger.handlers
        if isinstance(h, logging.StreamHandler)
        and not isinstance(h, logging.FileHandler)
    ]


class TestLoggingConfig(unittest.TestCase):
    """Verify logging setup behaviour."""

    def setUp(self) -> None:
        """Detach handlers left by an earlier test."""
        self.root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        for handler in list(self.root_logger.handlers):
            self.root_logger.removeHandler(handler)
            handler.close()

    def test_setup_creates_log_file(self) -> None:
        """setup_logging returns a path that exists on disk."""
        log_path = setup_logging()
        self.assertTrue(log_path.exists())

    def test_log_file_naming_convention(self) -> None:
        """Log file name matches run_YYYYMMDD_HHMMSS.log format."""
        log_path = setup_logging()
        self.assertRegex(log_path.name, r"^run_\d{8}_\d{6}\.log$")

    def test_explicit_logs_dir(self) -> None:
        """An explicit directory is created and used."""
        with TemporaryDirectory() as tmp:
            target = Path(tmp) / "nested" / "logs"
            log_path = setup_logging(logs_dir=target)
            self.assertEqual(log_path.parent, target)
            self.assertTrue(target.is_dir())
            for handler in list(self.root_logger.handlers):
                self.root_logger.removeHandler(handler)
                handler.close()

    def test_file_handler_level_debug(self) -> None:
        """File handler should be set to DEBUG level."""
        setup_logging()
        file_handlers = [
            h
            for h in self.root_logger.handlers
            if isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(len(file_handlers), 1)
        self.assertEqual(file_handlers[0].level, logging.DEBUG)

    def test_console_handler_level_warning(self) -> None:
        """Console handler defaults to WARNING."""
        setup_logging()
        stream_handlers = _stream_handlers(self.root_logger)
        self.assertEqual(len(stream_handlers), 1)
        self.assertEqual(stream_handlers[0].level, logging.WARNING)

    def test_verbose_console_handler_level_info(self) -> None:
        """verbose=True lowers the console threshold to INFO."""
        setup_logging(verbose=True)
        stream_handlers = _stream_handlers(self.root_logger)
        self.assertEqual(stream_handlers[0].level, logging.INFO)

    def test_repeated_calls_no_duplicate_handlers(self) -> None:
        """Calling setup_logging twice does not duplicate handlers."""
        setup_logging()
        count_before = len(self.root_logger.handlers)
        setup_logging()
        self.assertEqual(len(self.root_logger.handlers), count_before)

    def test_root_logger_level_is_debug(self) -> None:
        """The package logger is set to DEBUG."""
        setup_logging()
        self.assertEqual(self.root_logger.level, logging.DEBUG)

    def test_module_records_reach_file(self) -> None:
        """Child loggers write through to the run file."""
        log_path = setup_logging()
        logging.getLogger("realhouse_seo.redirects").debug("hop %s", 1)
        for handler in self.root_logger.handlers:
            handler.flush()
        self.assertIn("hop 1", log_path.read_text(encoding="utf-8"))

    def test_log_file_inside_logs_dir(self) -> None:
        """Log file is created inside the logs/ directory."""
        log_path = setup_logging()
        self.assertEqual(log_path.parent.name, "logs")


if __name__ == "__main__":
    unittest.main()
