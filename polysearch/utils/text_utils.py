"""
Text utility functions for polysearch.

Provides type-name canonicalization and the lenient integer coercion
used when building filter clauses.
"""

import math
import re
from typing import Any

_LEADING_WORD = re.compile(r"^[a-z\d]*")
_SEGMENT = re.compile(r"(?:_|(/))([a-z\d]*)", re.IGNORECASE)
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def camelize(name: Any) -> str:
    """
    Convert a type name to its canonical CamelCase form.

    Classes are reduced to their ``__name__``. Underscored names are
    joined and capitalized, path separators become ``::``.

    Args:
        name: Type name string, symbol-like value, or class.

    Returns:
        Canonical type name, e.g. ``"blog_post"`` -> ``"BlogPost"``.
    """
    if isinstance(name, type):
        return name.__name__

    text = str(name)
    text = _LEADING_WORD.sub(lambda m: m.group(0).capitalize(), text, count=1)
    text = _SEGMENT.sub(
        lambda m: ("::" if m.group(1) else "") + m.group(2).capitalize(),
        text
    )
    return text


def to_int(value: Any) -> int:
    """
    Coerce a value to int, never raising.

    Strings contribute their leading integer (``"12abc"`` -> 12); anything
    that has no numeric reading, NaN and infinities included, becomes 0.

    Args:
        value: Value to coerce.

    Returns:
        Integer reading of the value.
    """
    if isinstance(value, bool):
        return int(value)

    if isinstance(value, int):
        return int(value)

    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0

    match = _LEADING_INT.match(str(value))
    if match:
        return int(match.group(1))
    return 0


if __name__ == "__main__":
    for raw in ["note", "blog_post", "BlogPost", "admin/user", "x-ray"]:
        print(f"camelize({raw!r}) -> {camelize(raw)!r}")

    for raw in ["42", " 7 apples", "abc", 3.9, None]:
        print(f"to_int({raw!r}) -> {to_int(raw)}")
