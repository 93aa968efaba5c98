"""Shared fixtures for markfill tests."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from markfill.engine import Expander
from markfill.markup import HtmlMarkup, TemplateRegistry

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class RenderHarness:
    """Render helper around one markup provider and one registry.

    Tests register partials, then call ``render`` with template text and a
    context; the result is the serialized output.
    """

    def __init__(self):
        self.markup = HtmlMarkup()
        self.registry = TemplateRegistry(markup=self.markup)

    @property
    def expander(self) -> Expander:
        return Expander(markup=self.markup, registry=self.registry)

    def register(self, template_id: str, text: str) -> None:
        self.registry.register(template_id, text)

    def parse(self, text: str):
        return self.markup.parse(text)

    def expand(self, template, context: dict[str, Any] | None = None):
        return self.expander.expand(template, {} if context is None else context)

    def render(self, template, context: dict[str, Any] | None = None) -> str:
        return self.markup.serialize(self.expand(template, context))

    def render_compact(self, template, context: dict[str, Any] | None = None) -> str:
        """Rendered output with all whitespace between tags removed."""
        return "".join(line.strip() for line in self.render(template, context).splitlines())


@pytest.fixture
def harness() -> RenderHarness:
    return RenderHarness()


@pytest.fixture
def markup() -> HtmlMarkup:
    return HtmlMarkup()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A working directory with markfill.yaml, a page, partials and data."""
    for src in (FIXTURES_DIR / "project").rglob("*"):
        if src.is_file():
            dst = tmp_path / src.relative_to(FIXTURES_DIR / "project")
            dst.parent.mkdir(parents=True, exist_ok=True)
            dst.write_text(src.read_text(encoding="utf-8"), encoding="utf-8")
    return tmp_path
