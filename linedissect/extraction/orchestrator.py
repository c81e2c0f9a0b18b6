"""Dissect filter that ties compilation, matching and conversion together.

The DissectFilter is the single entry point for processing records:

- ``register()`` compiles every mapping pattern once. A structurally broken
  pattern raises FieldFormatError here and the filter is unusable.
- ``filter(record)`` dissects each configured source field, merges the
  captures into the record, runs datatype conversion and, when every rule
  matched, applies ``add_field`` / ``add_tag``.

Per-record problems never raise out of ``filter``. They are reported as
tags on the record plus WARNING log lines:

- source field missing: logged only
- delimiter not found: logged, ``tag_on_failure`` tags appended, partial
  captures kept
- datatype conversion failures: see ``converters.py``
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from linedissect.config import DissectConfig
from linedissect.constants import (
    MSG_EVENT_AFTER,
    MSG_EVENT_BEFORE,
    MSG_KEY_NOT_FOUND,
    MSG_PATTERN_NOT_FOUND,
    PLACEHOLDER_CLOSE,
    PLACEHOLDER_OPEN,
)
from linedissect.extraction.converters import DatatypeConverter
from linedissect.patterns import Dissector, compile_pattern
from linedissect.types.core import Event
from linedissect.types.errors import FieldFormatError
from linedissect.types.results import ConversionFailure, DissectOutcome, DissectStatus
from linedissect.utils.logger import logger

if TYPE_CHECKING:
    from linedissect.types.core import Record


@dataclass
class FilterReport:
    """What happened to one record during ``filter``."""

    outcomes: dict[str, DissectOutcome] = field(default_factory=dict)
    conversion_failures: list[ConversionFailure] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True when at least one rule ran and every rule matched."""
        return bool(self.outcomes) and all(o.matched for o in self.outcomes.values())


def interpolate(template: str, record: Record) -> str:
    """Substitute ``%{name}`` references with record values.

    References to absent fields are left as written.
    """
    parts: list[str] = []
    cursor = 0
    while True:
        start = template.find(PLACEHOLDER_OPEN, cursor)
        if start == -1:
            break
        end = template.find(PLACEHOLDER_CLOSE, start + len(PLACEHOLDER_OPEN))
        if end == -1:
            break
        name = template[start + len(PLACEHOLDER_OPEN):end]
        value = record.get(name)
        parts.append(template[cursor:start])
        if value is None:
            parts.append(template[start:end + len(PLACEHOLDER_CLOSE)])
        else:
            parts.append(value if isinstance(value, str) else str(value))
        cursor = end + len(PLACEHOLDER_CLOSE)
    parts.append(template[cursor:])
    return "".join(parts)


class DissectFilter:
    """Applies a DissectConfig to records.

    Usage:
        dissect = DissectFilter(DissectConfig(mapping={"message": "%{a} %{b}"}))
        dissect.register()
        event = dissect.filter(Event({"message": "hello world"}))
        event.get("b")  # "world"
    """

    def __init__(self, config: DissectConfig | dict[str, Any] | None = None) -> None:
        if config is None:
            config = DissectConfig()
        elif isinstance(config, dict):
            config = DissectConfig.from_dict(config)
        self._config = config
        self._dissectors: dict[str, Dissector] = {}
        self._converter = DatatypeConverter(config.convert_datatype)
        self._registered = False

    @property
    def config(self) -> DissectConfig:
        return self._config

    @property
    def dissectors(self) -> dict[str, Dissector]:
        """Compiled dissectors by source field (empty before register)."""
        return dict(self._dissectors)

    def register(self) -> None:
        """Compile every mapping pattern.

        Raises:
            FieldFormatError: If any pattern is structurally invalid.
        """
        dissectors: dict[str, Dissector] = {}
        for source, pattern_text in self._config.mapping.items():
            try:
                dissectors[source] = Dissector(compile_pattern(pattern_text))
            except FieldFormatError as e:
                e.context.source_field = source
                raise
        self._dissectors = dissectors
        self._registered = True

    def filter(self, record: Record) -> Record:
        """Dissect one record in place and return it."""
        self.process(record)
        return record

    def process(self, record: Record) -> FilterReport:
        """Dissect one record in place, reporting what happened."""
        if not self._registered:
            self.register()

        report = FilterReport()
        logger.debug(MSG_EVENT_BEFORE)

        for source, dissector in self._dissectors.items():
            log = logger.bind(source=source)
            outcome = dissector.dissect_record(record, source)
            report.outcomes[source] = outcome

            if outcome.status is DissectStatus.KEY_NOT_FOUND:
                log.warning(MSG_KEY_NOT_FOUND)
                continue

            for name, value in outcome.values.items():
                record.set(name, value)

            if not outcome.matched:
                log.warning(MSG_PATTERN_NOT_FOUND)
                for tag in self._config.tag_on_failure:
                    record.append_tag(tag)

        report.conversion_failures = self._converter.convert(record)

        if report.success:
            self._decorate(record)

        logger.debug(MSG_EVENT_AFTER)
        return report

    def filter_many(self, records: Iterable[Record]) -> list[Record]:
        """Apply ``filter`` to each record in turn."""
        return [self.filter(record) for record in records]

    def dissect_line(self, line: str, source: str = "message") -> Event:
        """Wrap a raw line in an Event under ``source`` and filter it."""
        event = Event({source: line})
        self.filter(event)
        return event

    def _decorate(self, record: Record) -> None:
        for name, template in self._config.add_field.items():
            record.set(interpolate(name, record), interpolate(template, record))
        for tag in self._config.add_tag:
            record.append_tag(interpolate(tag, record))
