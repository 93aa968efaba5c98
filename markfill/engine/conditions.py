"""Restricted boolean conditions for ``<if cond="...">``.

A condition is one or more comparisons joined by ``&&`` / ``||``::

    {{ num }} > 3 && {{ name }} == 'bob' || {{ admin }}

The language is deliberately tiny so that templates can never run host code:
no parentheses, no negation, no arithmetic, no member access. Combinators have
no relative precedence and are reduced strictly left to right, so
``a && b || c`` means ``(a && b) || c``.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from markfill.engine.paths import resolve_operand
from markfill.engine.primitives import compare, loose_equals, strict_equals
from markfill.errors import InvalidInputType, MalformedAccessor

if TYPE_CHECKING:
    from collections.abc import Mapping

FORBIDDEN_CHARS = ("!", "(", ")", "[", "]", ".", ",", "+", "-", "*", "/")

# Longer operators first so "===" is never split as "==" + "=".
OPERATORS = ("===", "!==", "==", "!=", ">=", "<=", ">", "<")

AND = "AND"
OR = "OR"


def check_forbidden(condition: str) -> None:
    for char in FORBIDDEN_CHARS:
        if char in condition:
            raise MalformedAccessor(
                f'Condition "{condition}" contains invalid "{char}" character.'
            )


def split_condition(condition: str) -> tuple[list[str], list[str]]:
    """Split on ``&&`` / ``||`` scanning left to right.

    Returns the comparison segments and the combinators between them.
    """
    segments: list[str] = []
    combinators: list[str] = []
    rest = condition
    i = 0
    while i < len(rest) - 1:
        pair = rest[i:i + 2]
        if pair in ("&&", "||"):
            segments.append(rest[:i].strip())
            combinators.append(AND if pair == "&&" else OR)
            rest = rest[i + 2:]
            i = 0
            continue
        i += 1
    segments.append(rest.strip())
    return segments, combinators


def reduce_logic(values: list[bool], combinators: list[str]) -> bool:
    """Fold booleans left to right, no precedence between AND and OR."""
    result = values[0]
    for combinator, value in zip(combinators, values[1:], strict=True):
        if combinator == AND:
            result = result and value
        else:
            result = result or value
    return result


def evaluate_comparison(expr: str, data: Mapping[str, Any]) -> bool:
    """Evaluate one atomic comparison, or the truthiness of a single operand."""
    for op in OPERATORS:
        idx = expr.find(op)
        if idx == -1:
            continue
        left = resolve_operand(expr[:idx], data)
        right = resolve_operand(expr[idx + len(op):], data)
        match op:
            case "===":
                return strict_equals(left, right)
            case "!==":
                return not strict_equals(left, right)
            case "==":
                return loose_equals(left, right)
            case "!=":
                return not loose_equals(left, right)
            case _:
                return compare(op, left, right)

    return bool(resolve_operand(expr, data))


def evaluate_condition(condition: str, data: Mapping[str, Any]) -> bool:
    if not isinstance(condition, str):
        raise InvalidInputType(f"Condition must be a string, got {type(condition).__name__}")
    check_forbidden(condition)

    segments, combinators = split_condition(condition)
    values = [evaluate_comparison(segment, data) for segment in segments]
    return reduce_logic(values, combinators)
