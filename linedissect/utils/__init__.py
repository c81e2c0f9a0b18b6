"""
Linedissect utility modules.

- Logging (loguru)
- Value serialization for log lines
"""

# Logger
from .logger import (
    configure_logging,
    is_debug_enabled,
    logger,
    resolve_log_level,
)

# Serialization
from .serialization import render_value, serialize_to_primitives

__all__ = [
    "configure_logging",
    "is_debug_enabled",
    "logger",
    "resolve_log_level",
    "render_value",
    "serialize_to_primitives",
]
