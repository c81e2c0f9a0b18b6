"""Dissect matching engine.

Walks a compiled Pattern over one input string, using each token's literal
delimiter as the split point:

1. Search the remaining input for the delimiter (leftmost occurrence).
2. The text before it is the capture for the token's field.
3. Advance past the delimiter and any immediate repeats of it.
4. The final token with an empty delimiter takes the rest of the input.

A delimiter that cannot be found stops matching. Captures made so far are
kept and the outcome is marked PATTERN_NOT_FOUND; nothing is raised.

Python strings are sequences of code points, so every search and slice
here lands on character boundaries regardless of how many bytes a
delimiter takes in UTF-8.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, assert_never

from linedissect.types.results import DissectOutcome, DissectStatus, ExtractionResult
from linedissect.utils.logger import logger

from .compiler import Pattern, compile_pattern
from .fields import FieldModifier, FieldSpec

if TYPE_CHECKING:
    from linedissect.types.core import Record


def _skip_repeats(text: str, position: int, delimiter: str) -> int:
    """Advance past consecutive repeats of ``delimiter`` starting at ``position``."""
    if not delimiter:
        return position
    while text.startswith(delimiter, position):
        position += len(delimiter)
    return position


class Dissector:
    """Applies one compiled pattern to input strings.

    Holds only the immutable Pattern, so one Dissector can serve any
    number of threads. Each call builds its own ExtractionResult.

    Usage:
        dissector = Dissector("%{ts} %{+ts} %{level} %{msg}")
        outcome = dissector.dissect("Mar 16 ERROR disk full")
        outcome.values  # {"ts": "Mar 16", "level": "ERROR", "msg": "disk full"}
    """

    def __init__(self, pattern: Pattern | str) -> None:
        if isinstance(pattern, str):
            pattern = compile_pattern(pattern)
        self._pattern = pattern

    @property
    def pattern(self) -> Pattern:
        return self._pattern

    def dissect(self, text: str) -> DissectOutcome:
        """Split ``text`` into fields.

        Args:
            text: One complete input line.

        Returns:
            DissectOutcome with the finalized captures.
        """
        pattern = self._pattern
        result = ExtractionResult()
        cursor = 0

        if pattern.prefix:
            found = text.find(pattern.prefix)
            if found == -1:
                return DissectOutcome(
                    status=DissectStatus.PATTERN_NOT_FOUND,
                    failed_delimiter=pattern.prefix,
                )
            cursor = _skip_repeats(text, found + len(pattern.prefix), pattern.prefix)

        last = len(pattern.tokens) - 1
        for index, token in enumerate(pattern.tokens):
            delimiter = token.delimiter
            if not delimiter:
                if index == last:
                    capture = text[cursor:]
                    cursor = len(text)
                else:
                    capture = ""
            else:
                found = text.find(delimiter, cursor)
                if found == -1:
                    return self._finish(
                        result,
                        status=DissectStatus.PATTERN_NOT_FOUND,
                        failed_token=index,
                        failed_delimiter=delimiter,
                    )
                capture = text[cursor:found]
                cursor = _skip_repeats(text, found + len(delimiter), delimiter)

            self._assign(result, token.field, capture)

        return self._finish(result, status=DissectStatus.MATCHED)

    def dissect_record(self, record: Record, source: str) -> DissectOutcome:
        """Dissect the value of ``source`` on a record.

        The record is not modified. A missing source field yields a
        KEY_NOT_FOUND outcome without attempting a match.
        """
        if not record.includes(source):
            return DissectOutcome(status=DissectStatus.KEY_NOT_FOUND)

        value = record.get(source)
        if value is None:
            return DissectOutcome(status=DissectStatus.KEY_NOT_FOUND)
        if not isinstance(value, str):
            value = str(value)
        return self.dissect(value)

    def _assign(self, result: ExtractionResult, spec: FieldSpec, capture: str) -> None:
        match spec.modifier:
            case FieldModifier.SKIP:
                pass
            case FieldModifier.NORMAL:
                if spec.name in self._pattern.append_names:
                    result.append_value(spec.name, capture)
                else:
                    result.set_value(spec.name, capture)
            case FieldModifier.APPEND:
                result.append_value(spec.name, capture)
            case FieldModifier.APPEND_ORDERED:
                result.append_value(spec.name, capture, spec.order)
            case FieldModifier.INDIRECT_KEY:
                result.set_indirect_key(spec.name, capture)
            case FieldModifier.INDIRECT_VALUE:
                result.set_indirect_value(spec.name, capture)
            case _:
                assert_never(spec.modifier)

    def _finish(
        self,
        result: ExtractionResult,
        status: DissectStatus,
        failed_token: int | None = None,
        failed_delimiter: str | None = None,
    ) -> DissectOutcome:
        if status is DissectStatus.MATCHED:
            for tag in result.unpaired_values:
                logger.debug("Dissector indirect value has no matching key, tag: {}", tag)
        return DissectOutcome(
            status=status,
            values=result.finalize(),
            failed_token=failed_token,
            failed_delimiter=failed_delimiter,
        )
