"""
Phase 1 Tests: Placeholder Fields

These tests verify placeholder parsing:
- Modifier detection for every prefix
- Append order suffixes
- Rejection of mixed append/indirect prefixes
"""

import re

import pytest

from linedissect.patterns import FieldModifier, FieldSpec, parse_field
from linedissect.types import ErrorCode, FieldFormatError


class TestParseField:
    """Tests for parse_field."""

    def test_empty_is_skip(self):
        """An empty placeholder is a skip field."""
        spec = parse_field("")
        assert spec.modifier is FieldModifier.SKIP
        assert spec.name == ""
        assert spec.saveable is False

    def test_normal(self):
        spec = parse_field("occurred_at")
        assert spec == FieldSpec(name="occurred_at", modifier=FieldModifier.NORMAL, raw="occurred_at")

    def test_append(self):
        spec = parse_field("+timestamp")
        assert spec.modifier is FieldModifier.APPEND
        assert spec.name == "timestamp"
        assert spec.order is None
        assert spec.is_append is True

    def test_append_ordered(self):
        spec = parse_field("+timestamp/2")
        assert spec.modifier is FieldModifier.APPEND_ORDERED
        assert spec.name == "timestamp"
        assert spec.order == 2

    def test_indirect_key(self):
        spec = parse_field("?ic")
        assert spec.modifier is FieldModifier.INDIRECT_KEY
        assert spec.name == "ic"
        assert spec.is_indirect is True

    def test_indirect_value(self):
        spec = parse_field("&ic")
        assert spec.modifier is FieldModifier.INDIRECT_VALUE
        assert spec.name == "ic"

    def test_slash_without_append_is_part_of_name(self):
        """Order suffixes only mean something for append fields."""
        spec = parse_field("path/1")
        assert spec.modifier is FieldModifier.NORMAL
        assert spec.name == "path/1"

    def test_bare_prefix_is_skip(self):
        assert parse_field("+").modifier is FieldModifier.SKIP
        assert parse_field("?").modifier is FieldModifier.SKIP

    def test_unicode_name(self):
        spec = parse_field("+horodatage_été/1")
        assert spec.name == "horodatage_été"
        assert spec.order == 1


class TestInvalidFields:
    """Tests for structurally invalid placeholders."""

    def test_append_then_indirect(self):
        """+& is rejected, citing both prefixes and the raw token."""
        msg = "Field cannot prefix with both Append and Indirect Prefix (+&): +&timestamp"
        with pytest.raises(FieldFormatError, match=re.escape(msg)):
            parse_field("+&timestamp")

    def test_indirect_then_append(self):
        """&+ is rejected the same way."""
        msg = "Field cannot prefix with both Append and Indirect Prefix (&+): &+timestamp"
        with pytest.raises(FieldFormatError, match=re.escape(msg)):
            parse_field("&+timestamp")

    def test_append_with_indirect_key(self):
        with pytest.raises(FieldFormatError, match=re.escape("(+?): +?key")):
            parse_field("+?key")

    def test_two_indirect_prefixes(self):
        with pytest.raises(FieldFormatError, match="more than one prefix"):
            parse_field("?&key")

    def test_non_numeric_order(self):
        with pytest.raises(FieldFormatError) as exc_info:
            parse_field("+timestamp/two")
        assert exc_info.value.code is ErrorCode.INVALID_ORDER_INDEX

    def test_empty_order(self):
        with pytest.raises(FieldFormatError):
            parse_field("+timestamp/")


class TestFieldSpec:
    """Tests for FieldSpec invariants."""

    def test_ordered_append_requires_order(self):
        with pytest.raises(ValueError, match="order must be"):
            FieldSpec(name="ts", modifier=FieldModifier.APPEND_ORDERED)

    def test_order_rejected_for_other_modifiers(self):
        with pytest.raises(ValueError, match="only valid for ordered append"):
            FieldSpec(name="ts", modifier=FieldModifier.NORMAL, order=1)

    def test_frozen(self):
        spec = parse_field("code")
        with pytest.raises(AttributeError):
            spec.name = "other"  # type: ignore[misc]
