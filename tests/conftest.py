"""
Pytest configuration and shared fixtures for Linedissect tests.
"""
import os

import pytest
from loguru import logger

# Keep the CLI's stderr sink quiet unless a test asks otherwise.
os.environ.setdefault("LINEDISSECT_LOG_LEVEL", "ERROR")


@pytest.fixture
def log_messages():
    """Capture formatted log messages (DEBUG and above) for the test's duration."""
    messages: list[str] = []
    sink_id = logger.add(
        lambda message: messages.append(message.record["message"]),
        level="DEBUG",
        format="{message}",
    )
    yield messages
    logger.remove(sink_id)


@pytest.fixture
def log_records():
    """Capture (level, message, extra) tuples for the test's duration."""
    records: list[tuple[str, str, dict]] = []
    sink_id = logger.add(
        lambda message: records.append(
            (
                message.record["level"].name,
                message.record["message"],
                dict(message.record["extra"]),
            )
        ),
        level="DEBUG",
        format="{message}",
    )
    yield records
    logger.remove(sink_id)
