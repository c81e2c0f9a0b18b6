"""
Configuration objects for the dissect filter.

A configuration holds one dissect rule per source field plus the optional
datatype conversions and success/failure decorations:

    {
        "mapping": {"message": "[%{occurred_at}] %{code} %{service}"},
        "convert_datatype": {"code": "int"},
        "tag_on_failure": ["_dissectfailure"],
        "add_field": {"parsed_by": "dissect"},
        "add_tag": ["dissected"]
    }

Only the shape is validated here. Patterns are compiled when the filter is
registered, and datatype names are checked per record.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from linedissect.constants import DEFAULT_TAG_ON_FAILURE
from linedissect.types.errors import ConfigurationError, ErrorCode, ErrorContext


def _default_tag_on_failure() -> list[str]:
    return [DEFAULT_TAG_ON_FAILURE]


@dataclass
class DissectConfig:
    """Settings for one DissectFilter."""

    mapping: dict[str, str] = field(default_factory=dict)
    convert_datatype: dict[str, str] = field(default_factory=dict)
    tag_on_failure: list[str] = field(default_factory=_default_tag_on_failure)
    add_field: dict[str, str] = field(default_factory=dict)
    add_tag: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DissectConfig:
        """Build a config from plain data, validating its shape.

        Raises:
            ConfigurationError: On unknown keys or wrongly typed values.
        """
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Dissect configuration must be an object, got {type(data).__name__}",
                code=ErrorCode.CONFIG_VALIDATION_FAILED,
            )

        unknown = sorted(set(data) - set(cls.__dataclass_fields__))
        if unknown:
            raise ConfigurationError(
                f"Unknown dissect configuration keys: {', '.join(unknown)}",
                code=ErrorCode.CONFIG_VALIDATION_FAILED,
                context=ErrorContext(operation="from_dict", additional_info={"keys": unknown}),
            )

        tag_on_failure = data.get("tag_on_failure", _default_tag_on_failure())
        if isinstance(tag_on_failure, str):
            tag_on_failure = [tag_on_failure]
        add_tag = data.get("add_tag", [])
        if isinstance(add_tag, str):
            add_tag = [add_tag]

        return cls(
            mapping=_string_map(data.get("mapping", {}), "mapping"),
            convert_datatype=_string_map(data.get("convert_datatype", {}), "convert_datatype"),
            tag_on_failure=_string_list(tag_on_failure, "tag_on_failure"),
            add_field=_string_map(data.get("add_field", {}), "add_field"),
            add_tag=_string_list(add_tag, "add_tag"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "mapping": dict(self.mapping),
            "convert_datatype": dict(self.convert_datatype),
            "tag_on_failure": list(self.tag_on_failure),
            "add_field": dict(self.add_field),
            "add_tag": list(self.add_tag),
        }


def _string_map(value: Any, name: str) -> dict[str, str]:
    if not isinstance(value, dict):
        raise ConfigurationError(
            f"{name} must be a mapping of strings to strings",
            code=ErrorCode.CONFIG_VALIDATION_FAILED,
            context=ErrorContext(operation="from_dict", additional_info={"key": name}),
        )
    for key, item in value.items():
        if not isinstance(key, str) or not isinstance(item, str):
            raise ConfigurationError(
                f"{name} must be a mapping of strings to strings, bad entry: {key!r}",
                code=ErrorCode.CONFIG_VALIDATION_FAILED,
                context=ErrorContext(operation="from_dict", additional_info={"key": name}),
            )
    return dict(value)


def _string_list(value: Any, name: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigurationError(
            f"{name} must be a list of strings",
            code=ErrorCode.CONFIG_VALIDATION_FAILED,
            context=ErrorContext(operation="from_dict", additional_info={"key": name}),
        )
    return list(value)


def load_config(path: str | Path) -> DissectConfig:
    """Load a DissectConfig from a JSON file.

    Raises:
        ConfigurationError: If the file is missing, not valid JSON, or has
            the wrong shape.
    """
    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigurationError(
            f"Configuration file not found: {config_path}",
            code=ErrorCode.MISSING_CONFIG,
            original_error=e,
        ) from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Configuration file is not valid JSON: {config_path}: {e}",
            original_error=e,
        ) from e

    return DissectConfig.from_dict(data)
