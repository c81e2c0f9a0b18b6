"""
Linedissect - delimiter-based field extraction for semi-structured text.

Splits a line such as ``[25/05/16 09:10:38:425 BST] 00000001 SystemOut``
into named fields using a pattern like ``[%{ts}] %{code} %{service}``:
- Placeholders (``%{name}``) mark captures
- Literal text between placeholders is used as split points
- No regular expressions, no backtracking

Beyond plain captures, placeholders support skip (``%{}``), append
(``%{+name}``, ``%{+name/2}``) and indirect key/value pairs
(``%{?key}=%{&key}``). Extracted fields can be coerced to ``int`` or
``float`` after matching.
"""

__version__ = "0.1.0"
