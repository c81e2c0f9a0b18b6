"""Value serialization for log output.

Converts record values (which may be nested mappings, sequences, enums or
datetimes) into JSON text so that failure log lines show what was actually
on the record.
"""

import json
import math
from dataclasses import asdict, is_dataclass
from datetime import datetime
from enum import Enum
from typing import Any


def serialize_to_primitives(data: Any) -> Any:
    """Convert complex Python types to JSON-serializable primitives.

    Handles:
    - Primitives (str, int, float, bool, None): returned as-is
    - datetime: converted to ISO format string
    - Enum: converted to value
    - dataclass: converted to dict via asdict()
    - dict: recursively serialize keys and values
    - list/tuple: recursively serialize items
    - Special floats (inf, nan): converted to None
    - Anything else: str()

    Examples:
        >>> serialize_to_primitives({"a": (1, 2)})
        {'a': [1, 2]}
    """
    if data is None:
        return None

    if isinstance(data, (str, int, bool)):
        return data

    if isinstance(data, float):
        if math.isnan(data) or math.isinf(data):
            return None
        return data

    if isinstance(data, datetime):
        return data.isoformat()

    if isinstance(data, Enum):
        return data.value

    if is_dataclass(data) and not isinstance(data, type):
        return serialize_to_primitives(asdict(data))

    if isinstance(data, dict):
        return {
            str(serialize_to_primitives(k)): serialize_to_primitives(v)
            for k, v in data.items()
        }

    if isinstance(data, (list, tuple, set, frozenset)):
        return [serialize_to_primitives(item) for item in data]

    return str(data)


def render_value(value: Any) -> str:
    """Render a record value for a log line.

    Strings are shown verbatim, ``None`` as ``null``, everything else as
    compact JSON (``{}`` for an empty mapping).
    """
    if value is None:
        return "null"
    if isinstance(value, str):
        return value
    return json.dumps(serialize_to_primitives(value), ensure_ascii=False)
