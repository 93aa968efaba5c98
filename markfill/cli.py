"""Thin CLI router — dispatches to commands."""
from __future__ import annotations

import os
import sys

USAGE = """\
markfill — fill HTML templates from data

Usage:
  markfill render <template> [options]   Expand a template file and print the HTML
  markfill check <template> [options]    Static checks on repeat/if/else/insert directives
  markfill eval "<condition>" [--data F] Evaluate an <if> condition against a data file
  markfill resolve <path> [--data F]     Resolve a path expression against a data file
  markfill mcp-server                    Start MCP Server

Options:
  --data FILE        Data context (.yaml, .yml or .json); default from markfill.yaml
  --id ID            Render/check the <template id="ID"> instead of the whole file
  --templates PATH   Extra file or directory of partials for <insert> (repeatable)
  --tables           Rename <t>/<th>/<tb>/<trow>/<tcell> to real table tags
"""


def main():
    args = sys.argv[1:]
    cwd = os.getcwd()
    command = args[0] if args else None

    if command == "render":
        from markfill.commands.render import cmd_render
        cmd_render(args[1:], cwd)

    elif command == "check":
        from markfill.commands.check import cmd_check
        cmd_check(args[1:], cwd)

    elif command == "eval":
        from markfill.commands.evaluate import cmd_eval
        cmd_eval(args[1:], cwd)

    elif command == "resolve":
        from markfill.commands.evaluate import cmd_resolve
        cmd_resolve(args[1:], cwd)

    elif command == "mcp-server":
        from markfill.integrations.mcp_server import run_server
        run_server()

    elif command in ("help", "--help", "-h", None):
        print(USAGE)

    else:
        print(f"Unknown command: {command}", file=sys.stderr)
        print(USAGE)
        sys.exit(1)
