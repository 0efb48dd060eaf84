"""Tests for structured logging setup."""

import logging

import pytest
import structlog

from garden_management.config import LoggingConfig
from garden_management.infrastructure.logging import get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def test_file_destination_writes_json_lines(tmp_path):
    log_file = tmp_path / "logs" / "garden.log"
    setup_logging(LoggingConfig(level="INFO", destination="file",
                                file_path=str(log_file), json_format=True))

    get_logger("tests.logging").info("Garden created", garden_id="g-1")
    for handler in logging.getLogger().handlers:
        handler.flush()

    content = log_file.read_text()
    assert '"event": "Garden created"' in content
    assert '"garden_id": "g-1"' in content


def test_root_level_follows_configuration():
    setup_logging(LoggingConfig(level="warning"))

    assert logging.getLogger().level == logging.WARNING


def test_both_destinations_install_two_handlers(tmp_path):
    setup_logging(LoggingConfig(destination="both", file_path=str(tmp_path / "garden.log")))

    assert len(logging.getLogger().handlers) == 2
