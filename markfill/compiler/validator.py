"""Static analysis for templates — catch directive mistakes before rendering."""
from __future__ import annotations

from typing import TYPE_CHECKING

from markfill.engine.conditions import FORBIDDEN_CHARS
from markfill.engine.directives import parse_repeat
from markfill.errors import MalformedDirective
from markfill.markup.html import iter_elements
from markfill.markup.registry import template_content
from markfill.types import Element, Fragment, Text

if TYPE_CHECKING:
    from markfill.markup.registry import TemplateRegistry
    from markfill.types import Node


class ValidationError:
    def __init__(self, level: str, message: str, tag: str | None = None):
        self.level = level  # "error" | "warning"
        self.message = message
        self.tag = tag

    def __str__(self):
        prefix = f"<{self.tag}> " if self.tag else ""
        return f"{self.level.upper()}: {prefix}{self.message}"


def validate_template(template: Node, registry: TemplateRegistry | None = None) -> list[ValidationError]:
    """Run all static checks on a template tree.

    Insert targets are only checked when a registry is given.
    """
    tree = template_content(template)
    errors: list[ValidationError] = []
    errors.extend(_check_repeats(tree))
    errors.extend(_check_conditions(tree))
    errors.extend(_check_else_placement(tree))
    errors.extend(_check_inserts(tree, registry))
    return errors


def format_errors(errors: list[ValidationError]) -> str:
    if not errors:
        return ""
    lines = []
    errs = [e for e in errors if e.level == "error"]
    warns = [e for e in errors if e.level == "warning"]
    if errs:
        lines.append(f"  {len(errs)} error(s):")
        for e in errs:
            lines.append(f"    ✗ {e}")
    if warns:
        lines.append(f"  {len(warns)} warning(s):")
        for e in warns:
            lines.append(f"    ⚠ {e}")
    return "\n".join(lines)


# ─── Checks ───

def _check_repeats(tree: Fragment) -> list[ValidationError]:
    """Every repeat needs a well-formed for="x of xs"; nested repeats must not reuse a binding."""
    errors: list[ValidationError] = []

    def visit(node: Node, bound: tuple[str, ...]) -> None:
        if not isinstance(node, (Element, Fragment)):
            return
        if isinstance(node, Element) and node.tag == "repeat":
            attr = node.get("for")
            if not attr:
                errors.append(ValidationError("error", 'Missing "for" attribute', "repeat"))
            else:
                try:
                    binding, _ = parse_repeat(attr)
                except MalformedDirective as e:
                    errors.append(ValidationError("error", str(e), "repeat"))
                else:
                    if binding in bound:
                        errors.append(ValidationError(
                            "warning", f'Binding "{binding}" is already bound by an outer repeat', "repeat"
                        ))
                    bound = (*bound, binding)
        for child in node.children:
            visit(child, bound)

    visit(tree, ())
    return errors


def _check_conditions(tree: Fragment) -> list[ValidationError]:
    errors: list[ValidationError] = []
    for el in iter_elements(tree):
        if el.tag != "if":
            continue
        cond = el.get("cond")
        if not cond:
            errors.append(ValidationError("error", 'Missing "cond" attribute', "if"))
            continue
        bad = [c for c in FORBIDDEN_CHARS if c in cond]
        if bad:
            errors.append(ValidationError(
                "error", f'Condition "{cond}" contains invalid character(s): {" ".join(bad)}', "if"
            ))
    return errors


def _check_else_placement(tree: Fragment) -> list[ValidationError]:
    """An <else> only renders when it directly follows an <if>."""
    errors: list[ValidationError] = []
    for parent in [tree, *iter_elements(tree)]:
        previous: Node | None = None
        for child in parent.children:
            if isinstance(child, Text) and not child.raw and not child.data.strip():
                continue
            if isinstance(child, Element) and child.tag == "else":
                if not (isinstance(previous, Element) and previous.tag == "if"):
                    errors.append(ValidationError(
                        "warning", "Not preceded by an <if>; it will never render", "else"
                    ))
            previous = child
    return errors


def _check_inserts(tree: Fragment, registry: TemplateRegistry | None) -> list[ValidationError]:
    errors: list[ValidationError] = []
    for el in iter_elements(tree):
        if el.tag != "insert":
            continue
        template_id = el.get("template")
        if not template_id:
            errors.append(ValidationError("error", 'Missing "template" attribute', "insert"))
        elif registry is not None and registry.lookup(template_id) is None:
            errors.append(ValidationError("error", f'Template not found: "{template_id}"', "insert"))
    return errors
