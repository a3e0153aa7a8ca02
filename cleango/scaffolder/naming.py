"""Identifier case conversion for generated Go code.

A free-text name such as ``"orders-svc"`` or ``"GetUser"`` is split into words
and reassembled as PascalCase, camelCase or snake_case.  All three forms come
from the same word list, so ``to_pascal_case(to_snake_case(s))`` always equals
``to_pascal_case(s)``.
"""

from __future__ import annotations

import re

from cleango.errors import ValidationError


# ---------------------------------------------------------------------------
# Word splitting
# ---------------------------------------------------------------------------

_SEPARATORS = re.compile(r"[\W_]+", re.UNICODE)
# An upper-case run followed by a capitalised word: "HTTPServer" -> "HTTP_Server"
_FIRST_CAP = re.compile(r"(.)([A-Z][a-z]+)")
# A lower-case letter or digit followed by an upper-case letter: "getUser" -> "get_User"
_ALL_CAP = re.compile(r"([a-z0-9])([A-Z])")

GO_KEYWORDS: frozenset[str] = frozenset({
    "break", "case", "chan", "const", "continue", "default", "defer", "else",
    "fallthrough", "for", "func", "go", "goto", "if", "import", "interface",
    "map", "package", "range", "return", "select", "struct", "switch", "type",
    "var",
})


def split_words(value: str) -> list[str]:
    """Split *value* into words on separators and case boundaries.

    Examples::

        split_words("orders-svc")  -> ["orders", "svc"]
        split_words("HTTPServer")  -> ["HTTP", "Server"]
        split_words("!!!")         -> []
    """
    words: list[str] = []
    for chunk in _SEPARATORS.split(value):
        if not chunk:
            continue
        marked = _ALL_CAP.sub(r"\1_\2", _FIRST_CAP.sub(r"\1_\2", chunk))
        words.extend(part for part in marked.split("_") if part)
    return words


# ---------------------------------------------------------------------------
# Case forms
# ---------------------------------------------------------------------------

def to_pascal_case(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``."""
    return "".join(word[:1].upper() + word[1:].lower() for word in split_words(value))


def to_camel_case(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``someThing``."""
    pascal = to_pascal_case(value)
    if pascal:
        return pascal[0].lower() + pascal[1:]
    return ""


def to_snake_case(value: str) -> str:
    """Convert ``SomeThing`` or ``some-thing`` to ``some_thing``."""
    return "_".join(word.lower() for word in split_words(value))


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def validate_identifier(raw_name: str, operation: str = "validate name") -> str:
    """Return the PascalCase form of *raw_name* or raise ``ValidationError``.

    Rejects names that produce no identifier at all (blank or punctuation
    only), names starting with a digit, and names whose derived forms are Go
    keywords.
    """
    pascal = to_pascal_case(raw_name)
    if not pascal:
        raise ValidationError(
            f"'{raw_name}' does not contain any letters or digits", operation
        )
    if pascal[0].isdigit():
        raise ValidationError(
            f"'{raw_name}' must start with a letter to form a Go identifier",
            operation,
        )
    for form in (to_camel_case(raw_name), to_snake_case(raw_name)):
        if form in GO_KEYWORDS:
            raise ValidationError(
                f"'{raw_name}' collides with the Go keyword '{form}'", operation
            )
    return pascal
