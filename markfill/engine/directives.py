"""Directive variants recognized by the expander.

Every node classifies as exactly one of ``Repeat``, ``If``, ``Else``,
``Insert`` or ``Plain``. Attribute parsing happens here so the expander only
ever sees well-formed directives.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from markfill.errors import MalformedDirective, MissingAttribute
from markfill.types import Element

if TYPE_CHECKING:
    from markfill.types import Node

REPEAT_TAG = "repeat"
IF_TAG = "if"
ELSE_TAG = "else"
INSERT_TAG = "insert"

DIRECTIVE_TAGS = frozenset({REPEAT_TAG, IF_TAG, ELSE_TAG, INSERT_TAG})


@dataclass
class Repeat:
    binding: str
    source: str
    element: Element


@dataclass
class If:
    condition: str
    element: Element


@dataclass
class Else:
    element: Element


@dataclass
class Insert:
    template_id: str
    element: Element


@dataclass
class Plain:
    node: Node


Directive = Union[Repeat, If, Else, Insert, Plain]


def parse_repeat(attr: str) -> tuple[str, str]:
    """Split ``for="item of items"`` into ``("item", "items")``."""
    idx = attr.find(" of ")
    if idx == -1:
        raise MalformedDirective(
            f'<repeat> "for" attribute must have the form "<variable> of <iterable>", got "{attr}".'
        )
    binding = attr[:idx].strip()
    source = attr[idx + 4:].strip()
    if not binding or not source:
        raise MalformedDirective(
            f'<repeat> "for" attribute must have the form "<variable> of <iterable>", got "{attr}".'
        )
    return binding, source


def _require(el: Element, attr: str) -> str:
    value = el.get(attr)
    if not value:
        raise MissingAttribute(f'<{el.tag}> tag requires a "{attr}" attribute.')
    return value


def classify(node: Node) -> Directive:
    if not isinstance(node, Element) or node.tag not in DIRECTIVE_TAGS:
        return Plain(node)

    match node.tag:
        case "repeat":
            binding, source = parse_repeat(_require(node, "for"))
            return Repeat(binding, source, node)
        case "if":
            return If(_require(node, "cond"), node)
        case "else":
            return Else(node)
        case "insert":
            return Insert(_require(node, "template"), node)
    return Plain(node)
