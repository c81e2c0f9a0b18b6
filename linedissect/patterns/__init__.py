"""Dissect pattern compilation and matching.

Components:
- FieldSpec / FieldModifier: one parsed ``%{...}`` placeholder
- Pattern / Token: compiled, immutable pattern
- compile_pattern: pattern text -> Pattern
- Dissector: applies a Pattern to input lines

Usage:
    from linedissect.patterns import Dissector, compile_pattern

    pattern = compile_pattern("[%{occurred_at}] %{code} %{service}")
    outcome = Dissector(pattern).dissect("[25/05/16 09:10:38] 00000001 SystemOut")
    outcome.values["service"]  # "SystemOut"
"""

from .compiler import Pattern, Token, compile_pattern
from .fields import FieldModifier, FieldSpec, parse_field
from .matcher import Dissector

__all__ = [
    "FieldModifier",
    "FieldSpec",
    "parse_field",
    "Pattern",
    "Token",
    "compile_pattern",
    "Dissector",
]
