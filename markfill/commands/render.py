"""markfill render <template> — expand a template file and print the result."""
from __future__ import annotations

import sys
from pathlib import Path

from markfill.commands import last, parse_options
from markfill.compiler import build_registry, load_config, load_data, load_template, strip_template_definitions
from markfill.engine import Expander
from markfill.errors import TemplateError, TemplateNotFound
from markfill.markup import HtmlMarkup, rename_table_tags


def render_file(template_path: str | Path, cwd: str | Path, *, data_path: str | None = None,
                template_id: str | None = None, template_sources: list[str] | None = None,
                table_tags: bool | None = None) -> str:
    """Render ``template_path`` with markfill.yaml defaults, overridden by the arguments."""
    config = load_config(cwd)
    markup = HtmlMarkup()

    document = load_template(Path(cwd) / template_path, markup)
    registry = build_registry(config.templates + list(template_sources or []), document, markup)

    if template_id:
        template = registry.lookup(template_id)
        if template is None:
            raise TemplateNotFound(f'Template with id "{template_id}" does not exist.')
    else:
        template = strip_template_definitions(document)

    data_file = data_path or config.data
    data = load_data(Path(cwd) / data_file) if data_file else {}

    tree = Expander(markup=markup, registry=registry).expand(template, data)
    if config.table_tags if table_tags is None else table_tags:
        tree = rename_table_tags(tree)
    return markup.serialize(tree)


def cmd_render(args: list[str], cwd: str):
    positional, options = parse_options(args)
    if len(positional) != 1:
        print("Usage: markfill render <template> [--data FILE] [--id ID] [--templates PATH] [--tables]",
              file=sys.stderr)
        sys.exit(1)

    try:
        output = render_file(
            positional[0],
            cwd,
            data_path=last(options, "--data"),
            template_id=last(options, "--id"),
            template_sources=options.get("--templates", []),
            table_tags=True if options.get("--tables") else None,
        )
    except TemplateError as e:
        print(f"✗ Render error ({type(e).__name__}): {e}", file=sys.stderr)
        sys.exit(1)
    except (OSError, ValueError) as e:
        print(f"✗ {e}", file=sys.stderr)
        sys.exit(1)

    print(output)
