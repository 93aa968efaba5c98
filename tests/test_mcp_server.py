"""MCP tool functions return JSON payloads and never raise on template errors."""
from __future__ import annotations

import json

from markfill.integrations.mcp_server import (
    markfill_check,
    markfill_evaluate,
    markfill_render,
    markfill_resolve,
)


def test_render_tool():
    result = json.loads(markfill_render(
        '<ul><repeat for="i of items"><insert template="li"/></repeat></ul>',
        {"items": [1, 2]},
        {"li": "<li>{{ i }}</li>"},
    ))
    assert result == {"html": "<ul><li>1</li><li>2</li></ul>"}


def test_render_tool_uses_inline_template_definitions():
    page = '<template id="hi"><b>{{ who }}</b></template><p><insert template="hi"/></p>'
    assert json.loads(markfill_render(page, {"who": "you"})) == {"html": "<p><b>you</b></p>"}


def test_render_tool_table_tags():
    result = json.loads(markfill_render("<t><trow><tcell>1</tcell></trow></t>", table_tags=True))
    assert result["html"] == "<table><tr><td>1</td></tr></table>"


def test_render_tool_reports_errors():
    result = json.loads(markfill_render("{{ missing }}", {}))
    assert result["kind"] == "UndefinedVariable"
    assert "missing" in result["error"]


def test_check_tool():
    result = json.loads(markfill_check('<repeat>x</repeat><insert template="nav"/>', {"nav": "<nav></nav>"}))
    assert result["ok"] is False
    assert result["issues"] == [{"level": "error", "tag": "repeat", "message": 'Missing "for" attribute'}]


def test_evaluate_tool():
    assert json.loads(markfill_evaluate("{{ n }} > 1 || {{ n }} == 0", {"n": 0})) == {"result": True}
    assert json.loads(markfill_evaluate("{{ n }} + 1", {"n": 0}))["kind"] == "MalformedAccessor"


def test_resolve_tool():
    assert json.loads(markfill_resolve("user.tags[1]", {"user": {"tags": ["a", "b"]}})) == {"value": "b"}
    assert json.loads(markfill_resolve("user.tags[5]", {"user": {"tags": []}}))["kind"] == "IndexOutOfRange"
