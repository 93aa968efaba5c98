"""Stand-in table tags.

Templates spell table parts as ``<t>``, ``<th>``, ``<tb>``, ``<trow>`` and
``<tcell>`` so that HTML parsers never foster-parent them out of a
``<repeat>`` or ``<if>``. Run ``rename_table_tags`` on the expanded tree to get
the real tags back.

Note: ``<th>`` here means ``<thead>``, not a header cell.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from markfill.markup.html import iter_elements

if TYPE_CHECKING:
    from markfill.types import Node

TABLE_TAGS = {
    "t": "table",
    "th": "thead",
    "tb": "tbody",
    "trow": "tr",
    "tcell": "td",
}


def rename_table_tags(tree: Node) -> Node:
    result = tree.clone()
    for el in list(iter_elements(result)):
        el.tag = TABLE_TAGS.get(el.tag, el.tag)
    return result
