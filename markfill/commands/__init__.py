"""Shared argument handling for ``markfill`` subcommands."""
from __future__ import annotations

import sys

# option -> True if it takes a value
OPTIONS = {
    "--data": True,
    "--id": True,
    "--templates": True,
    "--tables": False,
}


def parse_options(args: list[str]) -> tuple[list[str], dict[str, list[str] | bool]]:
    """Split argv into positionals and options. ``--templates`` may repeat."""
    positional: list[str] = []
    options: dict[str, list[str] | bool] = {}
    i = 0
    while i < len(args):
        arg = args[i]
        if arg.startswith("--"):
            name, _, inline = arg.partition("=")
            if name not in OPTIONS:
                print(f"Unknown option: {name}", file=sys.stderr)
                sys.exit(1)
            if not OPTIONS[name]:
                options[name] = True
                i += 1
                continue
            if inline:
                value = inline
            elif i + 1 < len(args):
                i += 1
                value = args[i]
            else:
                print(f"Option {name} requires a value", file=sys.stderr)
                sys.exit(1)
            options.setdefault(name, []).append(value)
        else:
            positional.append(arg)
        i += 1
    return positional, options


def last(options: dict, name: str) -> str | None:
    values = options.get(name)
    return values[-1] if values else None
