"""markfill check <template> — static checks on directives."""
from __future__ import annotations

import sys
from pathlib import Path

from markfill.commands import last, parse_options
from markfill.compiler import (
    build_registry,
    format_errors,
    load_config,
    load_template,
    strip_template_definitions,
    validate_template,
)


def cmd_check(args: list[str], cwd: str):
    positional, options = parse_options(args)
    if len(positional) != 1:
        print("Usage: markfill check <template> [--id ID] [--templates PATH]", file=sys.stderr)
        sys.exit(1)

    template_path = Path(cwd) / positional[0]
    if not template_path.exists():
        print(f"Template file not found: {template_path}", file=sys.stderr)
        sys.exit(1)

    try:
        config = load_config(cwd)
        document = load_template(template_path)
        registry = build_registry(config.templates + options.get("--templates", []), document)
    except (OSError, ValueError) as e:
        print(f"✗ {e}", file=sys.stderr)
        sys.exit(1)

    template_id = last(options, "--id")
    if template_id:
        template = registry.lookup(template_id)
        if template is None:
            print(f'✗ Template with id "{template_id}" does not exist.', file=sys.stderr)
            sys.exit(1)
        targets = {template_id: template}
    else:
        # The page itself plus every definition it carries
        targets = {positional[0]: strip_template_definitions(document)}
        for tid in registry:
            targets[tid] = registry.lookup(tid)

    failed = False
    for name, tree in targets.items():
        errors = validate_template(tree, registry)
        if any(e.level == "error" for e in errors):
            failed = True
            print(f'✗ "{name}" failed validation:')
        else:
            print(f'✓ "{name}" ok')
        if errors:
            print(format_errors(errors))

    if failed:
        sys.exit(1)
