"""
Linedissect type definitions.

This module exports the record abstraction, extraction result types and
the error hierarchy.
"""

# Core types
from .core import Event, Record

# Error types
from .errors import (
    ConfigurationError,
    DissectError,
    ErrorCode,
    ErrorContext,
    ErrorSeverity,
    FieldFormatError,
)

# Result types
from .results import (
    AppendBuffer,
    ConversionFailure,
    ConversionFailureKind,
    DissectOutcome,
    DissectStatus,
    ExtractionResult,
)

__all__ = [
    # Core types
    "Event",
    "Record",
    # Error types
    "ErrorCode",
    "ErrorSeverity",
    "ErrorContext",
    "DissectError",
    "FieldFormatError",
    "ConfigurationError",
    # Result types
    "AppendBuffer",
    "ExtractionResult",
    "DissectStatus",
    "DissectOutcome",
    "ConversionFailureKind",
    "ConversionFailure",
]
