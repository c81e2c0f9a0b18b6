"""Dissect pattern compiler.

Turns a pattern string such as ``[%{ts}] %{code} %{service}`` into an
immutable Pattern: an optional leading literal followed by an ordered
sequence of (field, trailing delimiter) tokens.

    [%{ts}] %{code} %{service}
    prefix="["
    tokens=(Token("] ", ts), Token(" ", code), Token("", service))

Compilation is pure. The only side effect is raising FieldFormatError for
a structurally broken pattern. A compiled Pattern holds no mutable state
and can be shared freely between threads.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from linedissect.constants import PLACEHOLDER_CLOSE, PLACEHOLDER_OPEN
from linedissect.types.errors import ErrorCode, ErrorContext, FieldFormatError

from .fields import FieldModifier, FieldSpec, parse_field


@dataclass(frozen=True)
class Token:
    """One compiled unit: a field and the literal text that ends it.

    An empty delimiter on the final token means "capture to end of input".
    """

    delimiter: str
    field: FieldSpec


@dataclass(frozen=True)
class Pattern:
    """A compiled dissect pattern."""

    text: str
    prefix: str
    tokens: tuple[Token, ...]
    append_names: frozenset[str] = field(default_factory=frozenset)

    @property
    def field_names(self) -> list[str]:
        """Names of the fields written directly by this pattern, in order.

        Indirect fields are excluded since their output names are only
        known once an input line has been matched.
        """
        names: list[str] = []
        for token in self.tokens:
            spec = token.field
            if spec.saveable and not spec.is_indirect and spec.name not in names:
                names.append(spec.name)
        return names

    def describe(self) -> list[dict[str, object]]:
        """Tabular view of the tokens, for display."""
        return [
            {
                "position": index,
                "raw": token.field.raw,
                "name": token.field.name,
                "modifier": token.field.modifier.value,
                "order": token.field.order,
                "delimiter": token.delimiter,
            }
            for index, token in enumerate(self.tokens)
        ]

    def __len__(self) -> int:
        return len(self.tokens)


def _scan(text: str) -> tuple[str, list[tuple[str, str]]]:
    """Split pattern text into a leading literal and (raw field, delimiter) pairs."""
    first = text.find(PLACEHOLDER_OPEN)
    if first == -1:
        return text, []

    prefix = text[:first]
    pairs: list[tuple[str, str]] = []
    cursor = first
    while cursor != -1:
        body_start = cursor + len(PLACEHOLDER_OPEN)
        close = text.find(PLACEHOLDER_CLOSE, body_start)
        if close == -1:
            raise FieldFormatError(
                f"Unterminated field placeholder at position {cursor}: {text[cursor:]}",
                code=ErrorCode.UNTERMINATED_PLACEHOLDER,
                context=ErrorContext(operation="compile_pattern", pattern=text),
            )
        raw = text[body_start:close]
        delimiter_start = close + len(PLACEHOLDER_CLOSE)
        cursor = text.find(PLACEHOLDER_OPEN, delimiter_start)
        delimiter = text[delimiter_start:] if cursor == -1 else text[delimiter_start:cursor]
        pairs.append((raw, delimiter))

    return prefix, pairs


def compile_pattern(text: str) -> Pattern:
    """Compile a dissect pattern.

    Args:
        text: Pattern text with ``%{...}`` placeholders.

    Returns:
        The compiled, immutable Pattern.

    Raises:
        FieldFormatError: If a placeholder is malformed or combines
            append with indirect prefixes.
    """
    prefix, pairs = _scan(text)

    tokens: list[Token] = []
    for raw, delimiter in pairs:
        try:
            spec = parse_field(raw)
        except FieldFormatError as e:
            e.context.pattern = text
            raise
        tokens.append(Token(delimiter=delimiter, field=spec))

    append_names = frozenset(
        token.field.name
        for token in tokens
        if token.field.modifier in (FieldModifier.APPEND, FieldModifier.APPEND_ORDERED)
    )

    return Pattern(
        text=text,
        prefix=prefix,
        tokens=tuple(tokens),
        append_names=append_names,
    )
