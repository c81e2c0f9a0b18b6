"""Hypothesis property-based tests for dissection.

Properties tested:
- Determinism: independently compiled copies of a pattern produce the same
  result for the same input
- Recovery: joining generated values with a delimiter and dissecting with
  the matching pattern gives the values back
- Delimiter independence: a multi-byte delimiter splits at the same
  positions as an ASCII one
- Safety: dissection never raises, whatever the input
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from linedissect.patterns import Dissector, compile_pattern

# =============================================================================
# Strategy Definitions
# =============================================================================

ASCII_DELIMITER = " "
UNICODE_DELIMITER = "྿"

# Field values never contain either delimiter and are never empty, since
# runs of a delimiter collapse into one split point.
field_values = st.text(
    alphabet=st.characters(
        exclude_categories=("Cs",),
        exclude_characters=(ASCII_DELIMITER, UNICODE_DELIMITER),
    ),
    min_size=1,
    max_size=20,
)

value_lists = st.lists(field_values, min_size=1, max_size=8)


def pattern_for(count: int, delimiter: str) -> str:
    return delimiter.join(f"%{{f{i}}}" for i in range(count))


# =============================================================================
# Properties
# =============================================================================


@given(value_lists)
@settings(max_examples=200)
def test_values_recovered(values):
    line = ASCII_DELIMITER.join(values)
    outcome = Dissector(pattern_for(len(values), ASCII_DELIMITER)).dissect(line)
    assert outcome.matched
    assert outcome.values == {f"f{i}": v for i, v in enumerate(values)}


@given(value_lists)
@settings(max_examples=200)
def test_unicode_delimiter_matches_ascii(values):
    ascii_outcome = Dissector(pattern_for(len(values), ASCII_DELIMITER)).dissect(
        ASCII_DELIMITER.join(values)
    )
    unicode_outcome = Dissector(pattern_for(len(values), UNICODE_DELIMITER)).dissect(
        UNICODE_DELIMITER.join(values)
    )
    assert unicode_outcome.values == ascii_outcome.values


@given(value_lists)
def test_append_rebuilds_line(values):
    pattern = ASCII_DELIMITER.join(["%{all}"] + ["%{+all}"] * (len(values) - 1))
    line = ASCII_DELIMITER.join(values)
    assert Dissector(pattern).dissect(line).values == {"all": line}


@given(st.text(max_size=60))
@settings(max_examples=200)
def test_compiling_twice_is_deterministic(line):
    text = "[%{ts}] %{code} %{+code/1} %{?k}=%{&k}% %{}|%{rest}"
    first = Dissector(compile_pattern(text)).dissect(line)
    second = Dissector(compile_pattern(text)).dissect(line)
    assert first == second


@given(st.text(max_size=60))
def test_never_raises(line):
    outcome = Dissector("<%{pri}>%{ts} %{+ts} %{?k}=%{&k} %{msg}").dissect(line)
    assert isinstance(outcome.values, dict)
