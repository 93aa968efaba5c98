"""Resolve accessor expressions (``a.b``, ``a[0]``, ``a["k"]``, ``f(1, {{x}})``) against a context."""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from markfill.engine.primitives import to_primitive
from markfill.errors import (
    IndexOutOfRange,
    InvalidInputType,
    MalformedAccessor,
    NotAFunction,
    TypeMismatch,
    UndefinedVariable,
)


def is_reference(token: str) -> bool:
    """True when the token is a ``{{ path }}`` reference rather than a literal."""
    return token.startswith("{{") and token.endswith("}}")


def resolve_operand(token: str, data: Mapping[str, Any]) -> Any:
    """Resolve a ``{{ path }}`` reference via the context, anything else as a literal."""
    token = token.strip()
    if is_reference(token):
        return resolve_path(token[2:-2], data)
    return to_primitive(token)


def resolve_path(path: str, data: Mapping[str, Any]) -> Any:
    """Resolve a path expression against ``data``.

    Exactly one accessor form applies per call, checked in this order:

    1. ``left.rest``: ``left`` must be a mapping; ``rest`` resolves inside it.
    2. ``name[token]``: quoted token is a mapping key, otherwise an integer
       index into a sequence or string.
    3. ``name(args)``: ``name`` must be callable; arguments are literals or
       ``{{ path }}`` references, evaluated left to right.
    4. ``name``: direct key lookup.
    """
    if not isinstance(path, str):
        raise InvalidInputType(f"Path expression must be a string, got {type(path).__name__}")
    if not isinstance(data, Mapping):
        raise InvalidInputType(f"Context must be a mapping, got {type(data).__name__}")
    path = path.strip()

    dot = path.find(".")
    if dot != -1:
        return _resolve_member(path[:dot], path[dot + 1:], data)

    if "[" in path:
        return _resolve_subscript(path, data)

    if "(" in path:
        return _resolve_call(path, data)

    return _lookup(path, data)


def _lookup(name: str, data: Mapping[str, Any]) -> Any:
    if name not in data:
        raise UndefinedVariable(f'"{name}" is not defined.')
    return data[name]


def _resolve_member(left: str, rest: str, data: Mapping[str, Any]) -> Any:
    obj = _lookup(left, data)
    if not isinstance(obj, Mapping):
        raise TypeMismatch(f'"{left}" is not a mapping, cannot access "{rest}".')
    return resolve_path(rest, obj)


def _resolve_subscript(path: str, data: Mapping[str, Any]) -> Any:
    open_idx = path.find("[")
    close_idx = path.find("]", open_idx)
    if close_idx == -1:
        raise MalformedAccessor(f'Missing closing square bracket for "{path}".')

    name = path[:open_idx].strip()
    token = path[open_idx + 1:close_idx].strip()
    base = _lookup(name, data)

    if len(token) >= 2 and token[0] == token[-1] and token[0] in "'\"":
        key = token[1:-1]
        if not isinstance(base, Mapping):
            raise TypeMismatch(f'Cannot access property "{key}" of "{name}": "{name}" is not a mapping.')
        if key not in base:
            raise UndefinedVariable(f'Property "{key}" does not exist on "{name}".')
        return base[key]

    try:
        index = int(token)
    except ValueError:
        raise MalformedAccessor(
            f'Value between square brackets in "{path}" must be an integer '
            "or a string wrapped in single or double quotes."
        ) from None

    if isinstance(base, Mapping) or not isinstance(base, Sequence):
        raise TypeMismatch(f'"{name}" is neither a string nor a sequence, cannot get element at index {index}.')
    if index < 0 or index >= len(base):
        raise IndexOutOfRange(f'Index {index} is out of range for "{name}" (length {len(base)}).')
    return base[index]


def _resolve_call(path: str, data: Mapping[str, Any]) -> Any:
    open_idx = path.find("(")
    close_idx = path.find(")", open_idx)
    if close_idx == -1:
        raise MalformedAccessor(f'Missing closing parenthesis for "{path}".')

    name = path[:open_idx].strip()
    if name not in data:
        raise UndefinedVariable(f'Function "{name}" is not defined.')
    func = data[name]
    if not callable(func):
        raise NotAFunction(f'"{name}" is not a function. Unexpected parenthesis after variable name.')

    args_text = path[open_idx + 1:close_idx]
    args = [] if not args_text.strip() else [resolve_operand(arg, data) for arg in args_text.split(",")]
    return func(*args)
