"""MCP Server — exposes markfill_* tools for rendering and checking templates."""
from __future__ import annotations

import json
from typing import Any

from mcp.server.fastmcp import FastMCP

from markfill.compiler import strip_template_definitions, validate_template
from markfill.engine import Expander, evaluate_condition, resolve_path, stringify
from markfill.errors import TemplateError
from markfill.markup import HtmlMarkup, TemplateRegistry, rename_table_tags

mcp = FastMCP("markfill")


def _error(e: Exception) -> str:
    return json.dumps({"error": str(e), "kind": type(e).__name__}, ensure_ascii=False)


def _registry(markup: HtmlMarkup, template: str, templates: dict[str, str] | None) -> TemplateRegistry:
    registry = TemplateRegistry.from_document(template, markup=markup)
    for template_id, text in (templates or {}).items():
        registry.register(template_id, text)
    return registry


@mcp.tool()
def markfill_render(template: str, data: dict[str, Any] | None = None,
                    templates: dict[str, str] | None = None, table_tags: bool = False) -> str:
    """Render HTML template text against a data object.

    `templates` maps ids to partial HTML for <insert template="id"/>.
    """
    markup = HtmlMarkup()
    try:
        registry = _registry(markup, template, templates)
        page = strip_template_definitions(markup.parse(template))
        tree = Expander(markup=markup, registry=registry).expand(page, data or {})
        if table_tags:
            tree = rename_table_tags(tree)
        return json.dumps({"html": markup.serialize(tree)}, ensure_ascii=False)
    except TemplateError as e:
        return _error(e)


@mcp.tool()
def markfill_check(template: str, templates: dict[str, str] | None = None) -> str:
    """Static checks on a template's directives (errors and warnings)."""
    markup = HtmlMarkup()
    registry = _registry(markup, template, templates)
    errors = validate_template(markup.parse(template), registry)
    return json.dumps({
        "ok": not any(e.level == "error" for e in errors),
        "issues": [{"level": e.level, "tag": e.tag, "message": e.message} for e in errors],
    }, ensure_ascii=False, indent=2)


@mcp.tool()
def markfill_evaluate(condition: str, data: dict[str, Any] | None = None) -> str:
    """Evaluate an <if cond="..."> condition against a data object."""
    try:
        return json.dumps({"result": evaluate_condition(condition, data or {})})
    except TemplateError as e:
        return _error(e)


@mcp.tool()
def markfill_resolve(path: str, data: dict[str, Any] | None = None) -> str:
    """Resolve a path expression (a.b, a[0], a["k"]) and return its rendered text."""
    try:
        return json.dumps({"value": stringify(resolve_path(path, data or {}))}, ensure_ascii=False)
    except TemplateError as e:
        return _error(e)


def run_server():
    mcp.run(transport="stdio")
