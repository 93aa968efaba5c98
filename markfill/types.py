from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

# ─── Markup tree ───

@dataclass
class Text:
    data: str
    raw: bool = False  # serialized verbatim (script/style bodies, declarations)

    def clone(self) -> Text:
        return Text(self.data, self.raw)


@dataclass
class Comment:
    data: str

    def clone(self) -> Comment:
        return Comment(self.data)


@dataclass
class Element:
    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)
    void: bool = False  # no closing tag (<br>, <img>, <insert/>)

    def clone(self) -> Element:
        return Element(
            self.tag,
            dict(self.attrs),
            [child.clone() for child in self.children],
            self.void,
        )

    def get(self, name: str, default: str | None = None) -> str | None:
        return self.attrs.get(name, default)


@dataclass
class Fragment:
    children: list[Node] = field(default_factory=list)

    def clone(self) -> Fragment:
        return Fragment([child.clone() for child in self.children])


Node = Union[Text, Comment, Element, Fragment]

# ─── Render configuration (markfill.yaml) ───

@dataclass
class RenderConfig:
    templates: list[str] = field(default_factory=list)  # files or dirs with partials
    data: str | None = None  # default data file
    table_tags: bool = False  # rename <t>/<trow>/<tcell>... after rendering
    extra: dict[str, Any] = field(default_factory=dict)
