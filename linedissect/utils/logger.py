"""
Logging utility for Linedissect.

All modules log through the loguru logger exported here. The library never
installs sinks on import; applications (and the CLI) call
``configure_logging()`` once to route messages to stderr.

Level resolution for ``configure_logging()``:
- explicit ``level`` argument
- ``LINEDISSECT_LOG_LEVEL`` environment variable
- ``DEBUG`` when ``DEBUG=true``
- ``WARNING`` otherwise
"""

import os
import sys

from loguru import logger as loguru_logger

DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "{extra[source]} | {message}"
)

_sink_id: int | None = None


def _stderr_sink(message: str) -> None:
    # Resolve sys.stderr per message so redirected streams are honoured
    sys.stderr.write(message)


def is_debug_enabled() -> bool:
    """Check if debug mode is enabled."""
    return os.environ.get("DEBUG", "").lower() == "true"


def resolve_log_level(level: str | None = None) -> str:
    """Pick the effective log level name."""
    if level:
        return level.upper()
    env_level = os.environ.get("LINEDISSECT_LOG_LEVEL")
    if env_level:
        return env_level.upper()
    if is_debug_enabled():
        return "DEBUG"
    return DEFAULT_LOG_LEVEL


def configure_logging(level: str | None = None) -> int:
    """Install (or replace) the stderr sink.

    Args:
        level: Optional level name overriding the environment.

    Returns:
        The loguru sink id.
    """
    global _sink_id

    if _sink_id is not None:
        loguru_logger.remove(_sink_id)
    else:
        # Drop loguru's default handler so messages are not printed twice
        loguru_logger.remove()

    loguru_logger.configure(extra={"source": "-"})
    _sink_id = loguru_logger.add(
        _stderr_sink,
        level=resolve_log_level(level),
        format=LOG_FORMAT,
    )
    return _sink_id


# Export loguru logger for direct use
logger = loguru_logger
