"""Template expander — resolves directives, then interpolates ``{{ path }}`` placeholders.

Directive syntax::

    <repeat for="item of items"> ... {{ item.name }} ... </repeat>
    <if cond="{{ count }} > 3"> ... </if><else> ... </else>
    <insert template="footer"/>

Each expansion runs four passes over a private copy of the tree, each pass
tree-wide before the next starts:

  1. repeat: body expanded once per element with the binding in scope
  2. if/else: exactly one branch survives (or none, without an else)
  3. insert: registry template expanded against the same context
  4. interpolation: serialize, strip comments, splice values, re-parse

Directive bodies are expanded with the same four passes before they are
spliced in, so nesting of any kind works.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from markfill.engine.conditions import evaluate_condition
from markfill.engine.directives import Else, If, Insert, Plain, Repeat, classify
from markfill.engine.paths import resolve_path
from markfill.engine.primitives import stringify
from markfill.errors import (
    DuplicateVariable,
    InvalidInputType,
    MalformedDirective,
    TemplateNotFound,
    TypeMismatch,
)
from markfill.markup.html import HtmlMarkup
from markfill.markup.registry import template_content
from markfill.types import Comment, Element, Fragment, Text

if TYPE_CHECKING:
    from collections.abc import Callable

    from markfill.markup.html import MarkupProvider
    from markfill.markup.registry import TemplateRegistry
    from markfill.types import Node

    # visit(children, index) -> index to continue from, or None to descend normally
    _Visitor = Callable[[list, int], int | None]


# ─── Context cloning ───

def clone_context(value: Any) -> Any:
    """Structural deep copy of a data context.

    Mappings, sequences and sets are copied; callables and other leaves are
    kept by reference so call syntax and repeats over sets keep working.
    """
    if isinstance(value, Mapping):
        return {k: clone_context(v) for k, v in value.items()}
    if isinstance(value, list):
        return [clone_context(v) for v in value]
    if isinstance(value, tuple):
        return tuple(clone_context(v) for v in value)
    if isinstance(value, set):
        return set(value)
    return value


# ─── Text passes ───

def strip_comments(text: str) -> str:
    """Remove ``<!-- ... -->`` spans, pairing the first opener with the first closer."""
    start = text.find("<!--")
    end = text.find("-->")
    while start != -1 and end != -1:
        if end < start:
            # stray "-->" ahead of the opener
            end = text.find("-->", start)
            continue
        text = text[:start] + text[end + 3:]
        start = text.find("<!--")
        end = text.find("-->")
    return text


def interpolate(text: str, data: Mapping[str, Any]) -> str:
    """Replace ``{{ path }}`` spans until none remain.

    Always takes the first ``{{`` and the first ``}}`` after it; nesting is not
    recognized.
    """
    while True:
        start = text.find("{{")
        if start == -1:
            return text
        end = text.find("}}", start + 2)
        if end == -1:
            return text
        value = resolve_path(text[start + 2:end].strip(), data)
        text = text[:start] + stringify(value) + text[end + 2:]


def _is_blank(node: Node) -> bool:
    return isinstance(node, Text) and not node.raw and not node.data.strip()


# ─── Expander ───

class Expander:
    def __init__(self, markup: MarkupProvider | None = None,
                 registry: TemplateRegistry | None = None):
        self.markup = markup or HtmlMarkup()
        self.registry = registry

    def expand(self, template: Node | str, context: Mapping[str, Any]) -> Fragment:
        if isinstance(template, str):
            template = self.markup.parse(template)
        elif not isinstance(template, (Element, Fragment, Text, Comment)):
            raise InvalidInputType(
                f"Template must be a markup node or markup text, got {type(template).__name__}"
            )
        if not isinstance(context, Mapping):
            raise InvalidInputType(f"Context must be a mapping, got {type(context).__name__}")

        tree = template_content(template).clone()
        return self._expand(tree, clone_context(context), ())

    def render(self, template: Node | str, context: Mapping[str, Any]) -> str:
        return self.markup.serialize(self.expand(template, context))

    def _expand(self, tree: Fragment, data: dict[str, Any], inserting: tuple[str, ...]) -> Fragment:
        """Expand a tree this expander already owns; ``tree`` is mutated."""
        self._walk(tree, lambda children, i: self._visit_repeat(children, i, data, inserting))
        self._walk(tree, lambda children, i: self._visit_conditional(children, i, data, inserting))
        self._walk(tree, lambda children, i: self._visit_insert(children, i, data, inserting))

        text = strip_comments(self.markup.serialize(tree))
        return self.markup.parse(interpolate(text, data))

    def _walk(self, parent: Element | Fragment, visit: _Visitor) -> None:
        children = parent.children
        i = 0
        while i < len(children):
            child = children[i]
            nxt = visit(children, i)
            if nxt is not None:
                i = nxt
                continue
            if isinstance(child, (Element, Fragment)):
                self._walk(child, visit)
            i += 1

    def _body(self, el: Element) -> Fragment:
        return Fragment([child.clone() for child in el.children])

    # ─── Pass 1: repeat ───

    def _visit_repeat(self, children: list, i: int, data: dict[str, Any],
                      inserting: tuple[str, ...]) -> int | None:
        directive = classify(children[i]) if _is_tag(children[i], "repeat") else None
        if not isinstance(directive, Repeat):
            return None

        iterable = resolve_path(directive.source, data)
        if not isinstance(iterable, (list, tuple, set, frozenset)):
            raise TypeMismatch(
                f'Iterable "{directive.source}" in the "for" attribute of <repeat> '
                f"must be a sequence or set, got {type(iterable).__name__}."
            )
        if data.get(directive.binding) is not None:
            raise DuplicateVariable(
                f'Data already has a non-empty property "{directive.binding}". '
                'Choose another variable name in the "for" attribute.'
            )

        output: list[Node] = []
        for item in iterable:
            scope = dict(data)
            scope[directive.binding] = item
            output.extend(self._expand(self._body(directive.element), scope, inserting).children)

        children[i:i + 1] = output
        return i + len(output)

    # ─── Pass 2: if / else ───

    def _visit_conditional(self, children: list, i: int, data: dict[str, Any],
                           inserting: tuple[str, ...]) -> int | None:
        node = children[i]
        if not (_is_tag(node, "if") or _is_tag(node, "else")):
            return None

        match classify(node):
            case If(condition=condition, element=element):
                else_idx = self._find_else(children, i)
                if evaluate_condition(condition, data):
                    if else_idx is not None:
                        del children[else_idx]
                    branch = element
                elif else_idx is not None:
                    branch = children[else_idx]
                    del children[i:else_idx]
                else:
                    del children[i]
                    return i
                output = self._expand(self._body(branch), data, inserting).children
                children[i:i + 1] = output
                return i + len(output)
            case Else():
                # Not preceded by an <if>: never rendered.
                del children[i]
                return i
            case Repeat() | Insert() | Plain():
                return None
        return None

    def _find_else(self, children: list, i: int) -> int | None:
        j = i + 1
        while j < len(children) and _is_blank(children[j]):
            j += 1
        if j < len(children) and _is_tag(children[j], "else"):
            return j
        return None

    # ─── Pass 3: insert ───

    def _visit_insert(self, children: list, i: int, data: dict[str, Any],
                      inserting: tuple[str, ...]) -> int | None:
        directive = classify(children[i]) if _is_tag(children[i], "insert") else None
        if not isinstance(directive, Insert):
            return None

        template_id = directive.template_id
        if template_id in inserting:
            chain = " -> ".join((*inserting, template_id))
            raise MalformedDirective(f"Circular <insert>: {chain}")

        template = self.registry.lookup(template_id) if self.registry is not None else None
        if template is None:
            raise TemplateNotFound(f'Template with id "{template_id}" does not exist.')

        tree = template_content(template).clone()
        output = self._expand(tree, data, (*inserting, template_id)).children
        children[i:i + 1] = output
        return i + len(output)


def _is_tag(node: Node, tag: str) -> bool:
    return isinstance(node, Element) and node.tag == tag


# ─── Module-level API ───

def expand(template: Node | str, context: Mapping[str, Any], *,
           registry: TemplateRegistry | None = None,
           markup: MarkupProvider | None = None) -> Fragment:
    """Expand ``template`` against ``context`` and return a new tree."""
    return Expander(markup=markup, registry=registry).expand(template, context)


def render(template: Node | str, context: Mapping[str, Any], *,
           registry: TemplateRegistry | None = None,
           markup: MarkupProvider | None = None) -> str:
    """Expand and serialize in one step."""
    return Expander(markup=markup, registry=registry).render(template, context)
