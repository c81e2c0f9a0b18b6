"""Record-level dissect pipeline.

Components:
- DissectFilter: compiles a DissectConfig and applies it to records
- DatatypeConverter: post-extraction ``int`` / ``float`` coercion
- FilterReport: per-record outcome of ``DissectFilter.process``

Usage:
    from linedissect.extraction import DissectFilter
    from linedissect.types import Event

    dissect = DissectFilter({"mapping": {"message": "%{?key}=%{&key}"}})
    event = dissect.filter(Event({"message": "cpu=95.43"}))
    event.get("cpu")  # "95.43"
"""

from .converters import DatatypeConverter, UncoercibleValue, to_float, to_int
from .orchestrator import DissectFilter, FilterReport, interpolate

__all__ = [
    "DatatypeConverter",
    "UncoercibleValue",
    "to_float",
    "to_int",
    "DissectFilter",
    "FilterReport",
    "interpolate",
]
