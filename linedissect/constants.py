"""Shared constants for Linedissect.

Centralizes placeholder syntax, the datatype vocabulary, tag prefixes and
the log message strings that callers and tests rely on.
"""

from datetime import datetime, timezone

# Placeholder syntax
PLACEHOLDER_OPEN = "%{"
PLACEHOLDER_CLOSE = "}"
APPEND_PREFIX = "+"
INDIRECT_VALUE_PREFIX = "&"
INDIRECT_KEY_PREFIX = "?"
ORDER_SEPARATOR = "/"

# Datatypes accepted by the converter. Closed, case-sensitive set.
SUPPORTED_DATATYPES: frozenset[str] = frozenset({"int", "float"})

# Tag vocabulary appended to records on per-record failures.
DEFAULT_TAG_ON_FAILURE = "_dissectfailure"
TAG_CONVERSION_MISSING = "_dataconversionmissing"
TAG_CONVERSION_NULL_VALUE = "_dataconversionnullvalue"
TAG_CONVERSION_UNCOERCIBLE = "_dataconversionuncoercible"

# Record key holding the tag list in the dict-backed Event.
TAGS_FIELD = "tags"

# Log messages. Tests assert on these exact strings.
MSG_EVENT_BEFORE = "Event before dissection"
MSG_EVENT_AFTER = "Event after dissection"
MSG_KEY_NOT_FOUND = "Dissector mapping, key not found in event"
MSG_PATTERN_NOT_FOUND = "Dissector mapping, pattern not found"
MSG_DATATYPE_UNSUPPORTED = "Dissector datatype conversion, datatype not supported: {}"
MSG_VALUE_UNCOERCIBLE = "Dissector datatype conversion, value cannot be coerced, key: {}, value: {}"


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime.

    Usable directly as a ``default_factory`` in dataclass fields.
    """
    return datetime.now(timezone.utc)
