"""Unit tests for logging setup."""

import sys
from pathlib import Path

import pytest
from loguru import logger

from newsfeed.models.config import LoggingConfig
from newsfeed.utils.logging import NO_CYCLE, cycle_context, setup_logging


@pytest.fixture
def log_file(tmp_path: Path):
    """Configure logging into a temporary file and restore the default stderr sink afterwards."""
    path = tmp_path / "logs" / "newsfeed.log"
    setup_logging(LoggingConfig(level="DEBUG", serialize=False, colorize=False, file_path=str(path)))
    yield path
    logger.remove()
    logger.add(sys.stderr)


def _read(path: Path) -> str:
    # Drains the enqueued file sink
    logger.remove()
    return path.read_text(encoding="utf-8")


class TestSetupLogging:
    """Test the configured sinks."""

    def test_creates_log_directory(self, log_file: Path) -> None:
        """Test that the file sink directory exists."""
        assert log_file.parent.is_dir()

    def test_records_outside_cycle_use_placeholder(self, log_file: Path) -> None:
        """Test the default cycle tag."""
        logger.info("Worker idle")

        line = [ln for ln in _read(log_file).splitlines() if "Worker idle" in ln][0]
        assert f"| {NO_CYCLE: <8} |" in line

    def test_cycle_context_tags_records(self, log_file: Path) -> None:
        """Test that records inside a cycle carry its id."""
        with cycle_context("ab12cd34"):
            logger.info("Fetched 3 posts")
        logger.info("After the cycle")

        lines = _read(log_file).splitlines()
        inside = [ln for ln in lines if "Fetched 3 posts" in ln][0]
        after = [ln for ln in lines if "After the cycle" in ln][0]
        assert "| ab12cd34 |" in inside
        assert "ab12cd34" not in after
