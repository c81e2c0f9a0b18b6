"""
Error handling system for Linedissect.

Two tiers of failure exist:
- Structural errors (broken placeholders, malformed configuration) are
  raised as exceptions at configuration time. A misconfigured pattern can
  never succeed, so nothing should run with it.
- Per-record conditions (missing source field, unmatched delimiter,
  failed datatype conversion) are never raised. They are reported as tags
  on the record plus log lines, see ``linedissect.extraction``.

This module only defines the first tier.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any

from linedissect.constants import utcnow


class ErrorCode(IntEnum):
    """Internal error codes for categorization."""

    # Pattern Errors (1000-1999)
    INVALID_FIELD = 1001
    UNTERMINATED_PLACEHOLDER = 1002
    INVALID_ORDER_INDEX = 1003

    # Configuration Errors (2000-2999)
    INVALID_CONFIG = 2001
    MISSING_CONFIG = 2002
    CONFIG_VALIDATION_FAILED = 2003


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class ErrorContext:
    """Context information for an error."""

    operation: str | None = None
    pattern: str | None = None
    source_field: str | None = None
    timestamp: datetime = field(default_factory=utcnow)
    additional_info: dict[str, Any] = field(default_factory=dict)


class DissectError(Exception):
    """Base error class for Linedissect."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        user_message: str,
        severity: str = ErrorSeverity.MEDIUM,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.severity = severity
        self.user_message = user_message
        self.context = context or ErrorContext()
        self.original_error = original_error

    def get_formatted_message(self) -> str:
        """Get a formatted error message for display to users."""
        parts = [
            f"[Error] {self.user_message}",
            f"   Code: {self.code.value}",
            f"   Detail: {self}",
        ]

        if self.context.operation:
            parts.append(f"   Operation: {self.context.operation}")
        if self.context.source_field:
            parts.append(f"   Source field: {self.context.source_field}")
        if self.context.pattern:
            parts.append(f"   Pattern: {self.context.pattern}")

        return "\n".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "name": self.__class__.__name__,
            "code": self.code.value,
            "message": str(self),
            "user_message": self.user_message,
            "severity": self.severity,
            "context": {
                "operation": self.context.operation,
                "pattern": self.context.pattern,
                "source_field": self.context.source_field,
                "timestamp": self.context.timestamp.isoformat(),
                "additional_info": self.context.additional_info,
            },
            "original_error": str(self.original_error) if self.original_error else None,
        }


class FieldFormatError(DissectError):
    """A placeholder in a pattern cannot be compiled."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INVALID_FIELD,
        user_message: str | None = None,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            user_message=user_message or "Invalid field format in dissect pattern.",
            severity=ErrorSeverity.HIGH,
            context=context,
            original_error=original_error,
        )


class ConfigurationError(DissectError):
    """Error related to configuration issues."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INVALID_CONFIG,
        user_message: str | None = None,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            user_message=user_message or "Configuration error occurred.",
            severity=ErrorSeverity.HIGH,
            context=context,
            original_error=original_error,
        )
