"""Literal coercion and the value semantics shared by conditions and interpolation."""
from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any

from markfill.errors import InvalidPrimitiveLiteral

_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?$")


def to_primitive(token: str) -> bool | str | int | float:
    """Convert a literal token to a boolean, string, or number."""
    if not isinstance(token, str):
        raise InvalidPrimitiveLiteral(f"Literal must be a string, got {type(token).__name__}")
    token = token.strip()

    if token == "true":
        return True
    if token == "false":
        return False
    if len(token) >= 2 and token[0] == token[-1] and token[0] in "'\"":
        return token[1:-1]
    if _INT_RE.match(token):
        return int(token)
    if _FLOAT_RE.match(token):
        return float(token)

    raise InvalidPrimitiveLiteral(
        f"Cannot determine the type of literal {token!r}. "
        "String values must be wrapped in single '' or double \"\" quotes."
    )


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def stringify(value: Any) -> str:
    """Text form of a value as it appears in rendered output."""
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else stringify(item) for item in value)
    return str(value)


# ─── Equality and ordering ───

def _kind(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if value is None:
        return "null"
    if isinstance(value, Mapping):
        return "mapping"
    return type(value).__name__


def _to_number(value: Any) -> float:
    """Numeric view of a value; NaN when there is none."""
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if is_number(value):
        return float(value)
    if value is None:
        return 0.0
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if _FLOAT_RE.match(text):
            return float(text)
    return math.nan


def strict_equals(left: Any, right: Any) -> bool:
    if _kind(left) != _kind(right):
        return False
    return left == right


def loose_equals(left: Any, right: Any) -> bool:
    lk, rk = _kind(left), _kind(right)
    if lk == rk:
        return left == right
    if lk == "null" or rk == "null":
        return False
    if lk == "bool":
        return loose_equals(_to_number(left), right)
    if rk == "bool":
        return loose_equals(left, _to_number(right))
    if {lk, rk} == {"number", "string"}:
        return _to_number(left) == _to_number(right)
    return False


def compare(op: str, left: Any, right: Any) -> bool:
    """Apply an ordering operator (>, <, >=, <=)."""
    if isinstance(left, str) and isinstance(right, str):
        a: Any = left
        b: Any = right
    else:
        a, b = _to_number(left), _to_number(right)
        if math.isnan(a) or math.isnan(b):
            return False
    match op:
        case ">":
            return a > b
        case "<":
            return a < b
        case ">=":
            return a >= b
        case "<=":
            return a <= b
    raise ValueError(f"Unknown ordering operator: {op}")
