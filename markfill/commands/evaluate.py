"""markfill eval / resolve — try a condition or a path against a data file."""
from __future__ import annotations

import sys
from pathlib import Path

from markfill.commands import last, parse_options
from markfill.compiler import load_config, load_data
from markfill.engine import evaluate_condition, resolve_path, stringify
from markfill.errors import TemplateError


def _load_context(options: dict, cwd: str) -> dict:
    data_file = last(options, "--data") or load_config(cwd).data
    return load_data(Path(cwd) / data_file) if data_file else {}


def cmd_eval(args: list[str], cwd: str):
    positional, options = parse_options(args)
    if len(positional) != 1:
        print('Usage: markfill eval "<condition>" [--data FILE]', file=sys.stderr)
        sys.exit(1)
    try:
        result = evaluate_condition(positional[0], _load_context(options, cwd))
    except TemplateError as e:
        print(f"✗ {type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(1)
    except (OSError, ValueError) as e:
        print(f"✗ {e}", file=sys.stderr)
        sys.exit(1)
    print(stringify(result))


def cmd_resolve(args: list[str], cwd: str):
    positional, options = parse_options(args)
    if len(positional) != 1:
        print("Usage: markfill resolve <path> [--data FILE]", file=sys.stderr)
        sys.exit(1)
    try:
        value = resolve_path(positional[0], _load_context(options, cwd))
    except TemplateError as e:
        print(f"✗ {type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(1)
    except (OSError, ValueError) as e:
        print(f"✗ {e}", file=sys.stderr)
        sys.exit(1)
    print(stringify(value))
