"""Placeholder field specifications.

A placeholder is the text between ``%{`` and ``}`` in a dissect pattern.
This module parses that text into a FieldSpec:

- ``%{}``            Skip (capture discarded)
- ``%{name}``        Normal
- ``%{+name}``       Append (space-joined with other pieces of ``name``)
- ``%{+name/2}``     Append at explicit order slot 2
- ``%{?tag}``        Indirect key: capture becomes a field name
- ``%{&tag}``        Indirect value: capture becomes that field's value

Append and indirect prefixes cannot be combined on one placeholder.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from linedissect.constants import (
    APPEND_PREFIX,
    INDIRECT_KEY_PREFIX,
    INDIRECT_VALUE_PREFIX,
    ORDER_SEPARATOR,
)
from linedissect.types.errors import ErrorCode, ErrorContext, FieldFormatError

_PREFIXES = frozenset({APPEND_PREFIX, INDIRECT_KEY_PREFIX, INDIRECT_VALUE_PREFIX})
_INDIRECT_PREFIXES = frozenset({INDIRECT_KEY_PREFIX, INDIRECT_VALUE_PREFIX})


class FieldModifier(StrEnum):
    """How a capture is written to the extraction result."""

    NORMAL = "normal"
    SKIP = "skip"
    APPEND = "append"
    APPEND_ORDERED = "append_ordered"
    INDIRECT_KEY = "indirect_key"
    INDIRECT_VALUE = "indirect_value"


@dataclass(frozen=True)
class FieldSpec:
    """One parsed placeholder.

    For indirect modifiers ``name`` is the pair tag joining a key with its
    value; it is never emitted as an output field.
    """

    name: str
    modifier: FieldModifier
    order: int | None = None
    raw: str = ""

    def __post_init__(self) -> None:
        if self.modifier is FieldModifier.APPEND_ORDERED:
            if self.order is None or self.order < 0:
                raise ValueError("order must be a non-negative integer for ordered append")
        elif self.order is not None:
            raise ValueError("order is only valid for ordered append")

    @property
    def is_append(self) -> bool:
        return self.modifier in (FieldModifier.APPEND, FieldModifier.APPEND_ORDERED)

    @property
    def is_indirect(self) -> bool:
        return self.modifier in (FieldModifier.INDIRECT_KEY, FieldModifier.INDIRECT_VALUE)

    @property
    def saveable(self) -> bool:
        """Whether a capture for this field can reach the output."""
        return self.modifier is not FieldModifier.SKIP


SKIP_FIELD = FieldSpec(name="", modifier=FieldModifier.SKIP)


def _leading_prefixes(raw: str) -> str:
    end = 0
    while end < len(raw) and raw[end] in _PREFIXES:
        end += 1
    return raw[:end]


def _split_order(body: str, raw: str) -> tuple[str, int]:
    name, _, order_text = body.rpartition(ORDER_SEPARATOR)
    if not order_text.isdigit() or not order_text.isascii():
        raise FieldFormatError(
            f"Field append order must be a non-negative integer: {raw}",
            code=ErrorCode.INVALID_ORDER_INDEX,
            context=ErrorContext(operation="parse_field", additional_info={"raw": raw}),
        )
    return name, int(order_text)


def parse_field(raw: str) -> FieldSpec:
    """Parse the text of one placeholder.

    Args:
        raw: Placeholder body, without the surrounding ``%{`` and ``}``.

    Returns:
        The FieldSpec for the placeholder.

    Raises:
        FieldFormatError: If the prefixes cannot be combined or an append
            order index is malformed.
    """
    if raw == "":
        return SKIP_FIELD

    prefixes = _leading_prefixes(raw)
    body = raw[len(prefixes):]

    if len(prefixes) > 1:
        found = set(prefixes)
        context = ErrorContext(operation="parse_field", additional_info={"raw": raw})
        if APPEND_PREFIX in found and found & _INDIRECT_PREFIXES:
            raise FieldFormatError(
                f"Field cannot prefix with both Append and Indirect Prefix ({prefixes}): {raw}",
                context=context,
            )
        raise FieldFormatError(
            f"Field cannot have more than one prefix ({prefixes}): {raw}",
            context=context,
        )

    if prefixes == APPEND_PREFIX:
        if ORDER_SEPARATOR in body:
            name, order = _split_order(body, raw)
            if not name:
                return FieldSpec(name="", modifier=FieldModifier.SKIP, raw=raw)
            return FieldSpec(name=name, modifier=FieldModifier.APPEND_ORDERED, order=order, raw=raw)
        modifier = FieldModifier.APPEND
    elif prefixes == INDIRECT_KEY_PREFIX:
        modifier = FieldModifier.INDIRECT_KEY
    elif prefixes == INDIRECT_VALUE_PREFIX:
        modifier = FieldModifier.INDIRECT_VALUE
    else:
        modifier = FieldModifier.NORMAL

    if not body:
        # A bare prefix such as %{+} has nothing to write to
        return FieldSpec(name="", modifier=FieldModifier.SKIP, raw=raw)

    return FieldSpec(name=body, modifier=modifier, raw=raw)
