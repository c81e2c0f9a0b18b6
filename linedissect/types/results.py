"""Result types for the dissect pipeline.

ExtractionResult is built incrementally while a line is matched and
finalized into a plain ``{field: value}`` mapping. DissectOutcome wraps
that mapping with the match status. ConversionFailure classifies datatype
conversion problems into the tag vocabulary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from linedissect.constants import (
    MSG_DATATYPE_UNSUPPORTED,
    MSG_VALUE_UNCOERCIBLE,
    TAG_CONVERSION_MISSING,
    TAG_CONVERSION_NULL_VALUE,
    TAG_CONVERSION_UNCOERCIBLE,
)
from linedissect.utils.serialization import render_value


class AppendBuffer:
    """Ordered pieces of one append field.

    Pieces with an explicit order index occupy that slot. Unordered pieces
    take the lowest free slots, starting at 0, in encounter order. Pieces
    sharing a slot keep encounter order.
    """

    __slots__ = ("_pieces",)

    def __init__(self) -> None:
        self._pieces: list[tuple[int | None, str]] = []

    def add(self, value: str, order: int | None = None) -> None:
        self._pieces.append((order, value))

    def render(self) -> str:
        taken = {order for order, _ in self._pieces if order is not None}
        slots: list[tuple[int, int, str]] = []
        next_free = 0
        for seq, (order, value) in enumerate(self._pieces):
            if order is None:
                while next_free in taken:
                    next_free += 1
                order = next_free
                next_free += 1
            slots.append((order, seq, value))
        slots.sort()
        return " ".join(value for _, _, value in slots)

    def __len__(self) -> int:
        return len(self._pieces)


class ExtractionResult:
    """Mutable, per-call accumulator of raw captures.

    Output field order follows first assignment. Never shared between calls.
    """

    def __init__(self) -> None:
        self._fields: dict[str, str | AppendBuffer] = {}
        self._indirect_keys: dict[str, str] = {}
        self._pending_values: dict[str, str] = {}

    def set_value(self, name: str, value: str) -> None:
        """Set a field, overwriting any earlier capture (last writer wins)."""
        self._fields[name] = value

    def append_value(self, name: str, value: str, order: int | None = None) -> None:
        """Add a piece to an append field."""
        existing = self._fields.get(name)
        if isinstance(existing, AppendBuffer):
            buffer = existing
        else:
            buffer = AppendBuffer()
            if existing is not None:
                buffer.add(existing)
            self._fields[name] = buffer
        buffer.add(value, order)

    def set_indirect_key(self, tag: str, key: str) -> None:
        """Record the output name for a pair tag, flushing a buffered value."""
        self._indirect_keys[tag] = key
        if tag in self._pending_values:
            self._fields[key] = self._pending_values.pop(tag)

    def set_indirect_value(self, tag: str, value: str) -> None:
        """Assign a value to the field named by the pair tag's key capture.

        Buffered until the key is captured when it has not been seen yet.
        """
        key = self._indirect_keys.get(tag)
        if key is None:
            self._pending_values[tag] = value
        else:
            self._fields[key] = value

    @property
    def unpaired_values(self) -> dict[str, str]:
        """Indirect values whose key was never captured, by pair tag."""
        return dict(self._pending_values)

    def finalize(self) -> dict[str, str]:
        """Render every field to its final string value."""
        return {
            name: value.render() if isinstance(value, AppendBuffer) else value
            for name, value in self._fields.items()
        }

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, name: object) -> bool:
        return name in self._fields


class DissectStatus(StrEnum):
    """Outcome of dissecting one source field."""

    MATCHED = "matched"
    PATTERN_NOT_FOUND = "pattern_not_found"
    KEY_NOT_FOUND = "key_not_found"


@dataclass
class DissectOutcome:
    """Captures produced for one source field plus how matching went.

    ``values`` holds whatever was captured before a failure; on
    KEY_NOT_FOUND it is empty.
    """

    status: DissectStatus
    values: dict[str, str] = field(default_factory=dict)
    failed_token: int | None = None
    failed_delimiter: str | None = None

    @property
    def matched(self) -> bool:
        return self.status is DissectStatus.MATCHED


class ConversionFailureKind(StrEnum):
    """Why a datatype conversion could not be applied."""

    UNSUPPORTED_TYPE = "unsupported_type"
    NULL_VALUE = "null_value"
    UNCOERCIBLE = "uncoercible"

    @property
    def tag_prefix(self) -> str:
        return _TAG_PREFIXES[self]


_TAG_PREFIXES: dict[ConversionFailureKind, str] = {
    ConversionFailureKind.UNSUPPORTED_TYPE: TAG_CONVERSION_MISSING,
    ConversionFailureKind.NULL_VALUE: TAG_CONVERSION_NULL_VALUE,
    ConversionFailureKind.UNCOERCIBLE: TAG_CONVERSION_UNCOERCIBLE,
}


@dataclass(frozen=True)
class ConversionFailure:
    """One failed (field, datatype) conversion."""

    field: str
    datatype: str
    kind: ConversionFailureKind
    value: Any = None

    @property
    def tag(self) -> str:
        return f"{self.kind.tag_prefix}_{self.field}_{self.datatype}"

    @property
    def message(self) -> str:
        if self.kind is ConversionFailureKind.UNSUPPORTED_TYPE:
            return MSG_DATATYPE_UNSUPPORTED.format(self.datatype)
        return MSG_VALUE_UNCOERCIBLE.format(self.field, render_value(self.value))
