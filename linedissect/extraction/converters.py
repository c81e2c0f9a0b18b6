"""Datatype conversion of dissected fields.

Given a mapping of field name -> type name, coerces record values in
place. Supported type names are ``int`` and ``float`` (case-sensitive).

Every (field, type) pair is handled independently, in mapping order.
Failures are classified into three kinds, each logged at WARNING and
tagged on the record:

- UNSUPPORTED_TYPE -> ``_dataconversionmissing_<field>_<type>``
- NULL_VALUE       -> ``_dataconversionnullvalue_<field>_<type>``
- UNCOERCIBLE      -> ``_dataconversionuncoercible_<field>_<type>``

A failure never stops the remaining conversions.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable

from linedissect.constants import (
    MSG_DATATYPE_UNSUPPORTED,
    MSG_VALUE_UNCOERCIBLE,
    SUPPORTED_DATATYPES,
)
from linedissect.types.results import ConversionFailure, ConversionFailureKind
from linedissect.utils.logger import logger
from linedissect.utils.serialization import render_value

if TYPE_CHECKING:
    from linedissect.types.core import Record


class UncoercibleValue(ValueError):
    """Raised by a coercion function when a value has the wrong shape."""


def to_int(value: Any) -> int:
    """Coerce a scalar to int.

    Strings use ``int()`` parsing, ints pass through and integral floats
    are accepted. Booleans, fractional floats and containers are rejected.
    """
    if isinstance(value, bool):
        raise UncoercibleValue(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
        raise UncoercibleValue(value)
    if isinstance(value, str):
        try:
            return int(value, 10)
        except ValueError as e:
            raise UncoercibleValue(value) from e
    raise UncoercibleValue(value)


def to_float(value: Any) -> float:
    """Coerce a scalar to float."""
    if isinstance(value, bool):
        raise UncoercibleValue(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError as e:
            raise UncoercibleValue(value) from e
    raise UncoercibleValue(value)


_COERCERS: dict[str, Callable[[Any], Any]] = {
    "int": to_int,
    "float": to_float,
}


class DatatypeConverter:
    """Applies a field -> datatype mapping to records.

    Usage:
        converter = DatatypeConverter({"code": "int", "cpu": "float"})
        failures = converter.convert(event)
    """

    def __init__(self, datatypes: Mapping[str, str] | None = None) -> None:
        self._datatypes: dict[str, str] = dict(datatypes or {})

    @property
    def datatypes(self) -> dict[str, str]:
        return dict(self._datatypes)

    def convert(self, record: Record) -> list[ConversionFailure]:
        """Convert record fields in place.

        Args:
            record: Record whose fields are coerced.

        Returns:
            Failures in the order they occurred. Each has already been
            logged and tagged on the record.
        """
        failures: list[ConversionFailure] = []
        for field_name, datatype in self._datatypes.items():
            failure = self._convert_one(record, field_name, datatype)
            if failure is not None:
                failures.append(failure)
                record.append_tag(failure.tag)
        return failures

    def _convert_one(
        self,
        record: Record,
        field_name: str,
        datatype: str,
    ) -> ConversionFailure | None:
        if datatype not in SUPPORTED_DATATYPES:
            logger.warning(MSG_DATATYPE_UNSUPPORTED, datatype)
            return ConversionFailure(
                field=field_name,
                datatype=datatype,
                kind=ConversionFailureKind.UNSUPPORTED_TYPE,
            )

        value = record.get(field_name)
        if value is None:
            logger.warning(MSG_VALUE_UNCOERCIBLE, field_name, "null")
            return ConversionFailure(
                field=field_name,
                datatype=datatype,
                kind=ConversionFailureKind.NULL_VALUE,
            )

        try:
            converted = _COERCERS[datatype](value)
        except UncoercibleValue:
            logger.warning(MSG_VALUE_UNCOERCIBLE, field_name, render_value(value))
            return ConversionFailure(
                field=field_name,
                datatype=datatype,
                kind=ConversionFailureKind.UNCOERCIBLE,
                value=value,
            )

        record.set(field_name, converted)
        return None
