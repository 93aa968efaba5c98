"""HTML markup provider: text <-> node tree, built on ``html.parser``."""
from __future__ import annotations

from html import escape
from html.parser import HTMLParser
from typing import TYPE_CHECKING, Protocol

from markfill.types import Comment, Element, Fragment, Text

if TYPE_CHECKING:
    from collections.abc import Iterator

    from markfill.types import Node

VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})

# Element bodies that are never escaped on output.
RAW_TEXT_ELEMENTS = frozenset({"script", "style"})


class MarkupProvider(Protocol):
    def parse(self, text: str) -> Fragment: ...

    def serialize(self, node: Node) -> str: ...

    def clone(self, node: Node) -> Node: ...

    def find_all(self, node: Node, tag: str) -> list[Element]: ...


class _TreeBuilder(HTMLParser):
    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.root = Fragment()
        self._stack: list[Element | Fragment] = [self.root]

    @property
    def _current(self) -> Element | Fragment:
        return self._stack[-1]

    def handle_starttag(self, tag, attrs):
        el = Element(tag, {k: "" if v is None else v for k, v in attrs})
        self._current.children.append(el)
        if tag in VOID_ELEMENTS:
            el.void = True
        else:
            self._stack.append(el)

    def handle_startendtag(self, tag, attrs):
        el = Element(tag, {k: "" if v is None else v for k, v in attrs}, void=True)
        self._current.children.append(el)

    def handle_endtag(self, tag):
        # Close up to the nearest matching open element; stray end tags are ignored.
        for i in range(len(self._stack) - 1, 0, -1):
            node = self._stack[i]
            if isinstance(node, Element) and node.tag == tag:
                del self._stack[i:]
                return

    def handle_data(self, data):
        current = self._current
        raw = isinstance(current, Element) and current.tag in RAW_TEXT_ELEMENTS
        children = current.children
        if children and isinstance(children[-1], Text) and children[-1].raw == raw:
            children[-1].data += data
        else:
            children.append(Text(data, raw=raw))

    def handle_comment(self, data):
        self._current.children.append(Comment(data))

    def handle_decl(self, decl):
        self._current.children.append(Text(f"<!{decl}>", raw=True))

    def handle_pi(self, data):
        self._current.children.append(Text(f"<?{data}>", raw=True))

    def unknown_decl(self, data):
        self._current.children.append(Text(f"<![{data}]>", raw=True))


class HtmlMarkup:
    """Default markup provider.

    ``parse`` always returns a ``Fragment``; unclosed elements are closed at the
    end of input. ``<tag/>`` is honored as an empty element for any tag, which
    keeps ``<insert template="x"/>`` usable.
    """

    def parse(self, text: str) -> Fragment:
        builder = _TreeBuilder()
        builder.feed(text)
        builder.close()
        return builder.root

    def serialize(self, node: Node) -> str:
        return "".join(_serialize(node))

    def inner(self, node: Element | Fragment) -> str:
        return "".join(self.serialize(child) for child in node.children)

    def clone(self, node: Node) -> Node:
        return node.clone()

    def find_all(self, node: Node, tag: str) -> list[Element]:
        return [el for el in iter_elements(node) if el.tag == tag]


def iter_elements(node: Node) -> Iterator[Element]:
    """Depth-first, document-order walk over elements below (and including) ``node``."""
    if isinstance(node, Element):
        yield node
    if isinstance(node, (Element, Fragment)):
        for child in node.children:
            yield from iter_elements(child)


def _serialize(node: Node) -> Iterator[str]:
    if isinstance(node, Text):
        yield node.data if node.raw else escape(node.data, quote=False)
    elif isinstance(node, Comment):
        yield f"<!--{node.data}-->"
    elif isinstance(node, Fragment):
        for child in node.children:
            yield from _serialize(child)
    else:
        attrs = "".join(
            f' {name}="{_escape_attr(value)}"' if value != "" else f" {name}"
            for name, value in node.attrs.items()
        )
        if node.void and not node.children:
            yield f"<{node.tag}{attrs}>" if node.tag in VOID_ELEMENTS else f"<{node.tag}{attrs}/>"
            return
        yield f"<{node.tag}{attrs}>"
        for child in node.children:
            yield from _serialize(child)
        yield f"</{node.tag}>"


def _escape_attr(value: str) -> str:
    return value.replace("&", "&amp;").replace('"', "&quot;")
