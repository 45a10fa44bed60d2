"""Tests for logging configuration."""
import logging
from pathlib import Path

import pytest

from mediamover.logging_config import get_logger, setup_logging


@pytest.mark.unit
class TestSetupLogging:
    """Test setup_logging function."""

    def test_setup_logging_default(self) -> None:
        logger = setup_logging()

        assert logger.name == "mediamover"
        assert logger.level == logging.INFO
        assert logger.propagate is False

    def test_setup_logging_verbose(self) -> None:
        logger = setup_logging(verbose=True)

        assert logger.level == logging.DEBUG

    def test_setup_logging_with_log_file(self, temp_dir: Path) -> None:
        log_file = temp_dir / "migration.log"

        logger = setup_logging(log_file=str(log_file))
        logger.info("Migration started")
        for handler in logger.handlers:
            handler.flush()

        assert len(logger.handlers) == 2
        assert "Migration started" in log_file.read_text()

        for handler in logger.handlers:
            handler.close()
        logger.handlers = []

    def test_setup_logging_does_not_duplicate_handlers(self) -> None:
        setup_logging()
        logger = setup_logging()

        assert len(logger.handlers) == 1


@pytest.mark.unit
class TestGetLogger:
    """Test get_logger function."""

    def test_get_logger_nests_short_names(self) -> None:
        assert get_logger("retry").name == "mediamover.retry"

    def test_get_logger_keeps_module_names(self) -> None:
        assert get_logger("mediamover.bucket.r2_manager").name == "mediamover.bucket.r2_manager"

    def test_get_logger_does_not_match_lookalike_prefix(self) -> None:
        assert get_logger("mediamoverx").name == "mediamover.mediamoverx"
