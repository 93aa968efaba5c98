"""Named templates available to ``<insert template="id"/>``."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from markfill.markup.html import HtmlMarkup, iter_elements
from markfill.types import Element, Fragment

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from markfill.markup.html import MarkupProvider
    from markfill.types import Node


class TemplateRegistry:
    """Id -> template tree lookup.

    Templates are stored as given; the expander clones before it mutates, so a
    registered tree is shared safely across renders.
    """

    def __init__(self, templates: Mapping[str, Node | str] | None = None, *,
                 markup: MarkupProvider | None = None):
        self.markup = markup or HtmlMarkup()
        self._templates: dict[str, Node] = {}
        for template_id, template in (templates or {}).items():
            self.register(template_id, template)

    def register(self, template_id: str, template: Node | str) -> None:
        if isinstance(template, str):
            template = self.markup.parse(template)
        self._templates[template_id] = template

    def lookup(self, template_id: str) -> Node | None:
        return self._templates.get(template_id)

    def update(self, other: TemplateRegistry) -> None:
        self._templates.update(other._templates)

    def __contains__(self, template_id: str) -> bool:
        return template_id in self._templates

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    # ─── Builders ───

    @classmethod
    def from_document(cls, document: Node | str, *,
                      markup: MarkupProvider | None = None) -> TemplateRegistry:
        """Collect every ``<template id="...">`` element of a document."""
        registry = cls(markup=markup)
        if isinstance(document, str):
            document = registry.markup.parse(document)
        for el in iter_elements(document):
            if el.tag == "template" and el.get("id"):
                registry.register(el.attrs["id"], el)
        return registry

    @classmethod
    def from_directory(cls, directory: str | Path, *, pattern: str = "*.html",
                       markup: MarkupProvider | None = None) -> TemplateRegistry:
        """One template per file, keyed by file stem.

        ``<template id>`` elements inside those files are registered as well.
        """
        registry = cls(markup=markup)
        path = Path(directory)
        if not path.is_dir():
            return registry

        for file in sorted(path.glob(pattern)):
            try:
                tree = registry.markup.parse(file.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError) as e:
                print(f"Warning: failed to load template {file}: {e}", file=sys.stderr)
                continue
            registry.register(file.stem, tree)
            registry.update(cls.from_document(tree, markup=registry.markup))
        return registry


def template_content(template: Node) -> Fragment:
    """The renderable content of a template: a ``<template>`` element's children, or the node itself."""
    if isinstance(template, Fragment):
        return template
    if isinstance(template, Element) and template.tag == "template":
        return Fragment(template.children)
    return Fragment([template])
