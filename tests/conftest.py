# tests/conftest.py

"""Shared pytest fixtures for all realhouse_seo tests."""

import logging
from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest

from realhouse_seo.config.logging_config import ROOT_LOGGER_NAME
from realhouse_seo.config.settings import Settings


@pytest.fixture(autouse=True)
def pinned_site() -> Generator[None, None, None]:
    """Pin origin and default city so a local .env cannot skew URLs."""
    with (
        patch.object(Settings, "SITE_ORIGIN", "https://realhouseiq.com"),
        patch.object(Settings, "DEFAULT_CITY", "Erbil"),
    ):
        yield


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path: Path) -> Generator[Path, None, None]:
    """Write run logs under tmp_path and detach handlers afterwards."""
    logs_dir = tmp_path / "logs"
    with patch.object(Settings, "LOGS_DIR", logs_dir):
        yield logs_dir
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
