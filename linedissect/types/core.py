"""
Core record types.

The dissect core only needs a record offering get/set of named values and
an append-only tag list. ``Record`` describes that surface; ``Event`` is the
dict-backed implementation used by the filter, the CLI and the tests.
"""

from __future__ import annotations

import copy
from typing import Any, Iterator, Protocol, runtime_checkable

from linedissect.constants import TAGS_FIELD


@runtime_checkable
class Record(Protocol):
    """Minimal record abstraction consumed by the dissect filter."""

    def get(self, name: str) -> Any | None:
        """Return the value of a field, or None when absent."""
        ...

    def set(self, name: str, value: Any) -> None:
        """Set or overwrite a field."""
        ...

    def includes(self, name: str) -> bool:
        """Check whether a field exists on the record."""
        ...

    def append_tag(self, tag: str) -> None:
        """Append a tag. Duplicates and order are preserved."""
        ...


class Event:
    """Dict-backed record.

    Tags live under the ``tags`` key, created on first append. They are
    never deduplicated or reordered.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(data) if data else {}

    def get(self, name: str) -> Any | None:
        return self._data.get(name)

    def set(self, name: str, value: Any) -> None:
        self._data[name] = value

    def includes(self, name: str) -> bool:
        return name in self._data

    def remove(self, name: str) -> Any | None:
        return self._data.pop(name, None)

    def append_tag(self, tag: str) -> None:
        self._data.setdefault(TAGS_FIELD, []).append(tag)

    @property
    def tags(self) -> list[str] | None:
        """Tag list, or None if no tag was ever appended."""
        return self._data.get(TAGS_FIELD)

    def to_dict(self) -> dict[str, Any]:
        """Return a deep copy of the record contents."""
        return copy.deepcopy(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"Event({self._data!r})"
