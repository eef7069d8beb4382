"""Command-line entry point for stackgen.

Usage::

    python -m stackgen stacks
    python -m stackgen set --name "Toko Ku" --stack Golang
    python -m stackgen generate --output ./toko-ku
    python -m stackgen connect ghp_xxx
    python -m stackgen generate --push
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from stackgen.app import CodeGeneratorApp
from stackgen.config import Config
from stackgen.scaffolder import Stack
from stackgen.utils import console, print_summary_table, print_warning, setup_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stackgen",
        description="stackgen -- starter files for React, Node.js, PHP, Go and more",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  stackgen set --name 'Toko Ku' --stack HTML\n"
            "  stackgen generate -o ./toko-ku\n"
            "  stackgen generate --push\n"
        ),
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("stacks", help="List the supported stacks")
    sub.add_parser("status", help="Show stored preferences and remaining credits")

    set_cmd = sub.add_parser("set", help="Change stored preferences")
    set_cmd.add_argument("--name", dest="app_name", help="Application name")
    set_cmd.add_argument("--description", help="Application description")
    set_cmd.add_argument("--stack", help="Target stack (see 'stacks')")
    set_cmd.add_argument("--language", dest="custom_lang", help="Language for the Custom stack")

    gen_cmd = sub.add_parser("generate", help="Generate starter files (spends one credit)")
    gen_cmd.add_argument("--output", "-o", default=None, help="Write the files to this directory")
    gen_cmd.add_argument("--push", action="store_true", help="Publish the files to GitHub")
    gen_cmd.add_argument("--quiet", "-q", action="store_true", help="Do not print file contents")

    connect_cmd = sub.add_parser("connect", help="Store a GitHub personal access token (repo scope)")
    connect_cmd.add_argument("token", help="Personal access token")

    sub.add_parser("disconnect", help="Forget the stored GitHub token")
    return parser


async def _generate(app: CodeGeneratorApp, args: argparse.Namespace) -> int:
    if app.generate() is None:
        return 1
    if not args.quiet:
        app.render()
    if args.output and await app.export(args.output) is None:
        return 1
    if args.push:
        result = await app.publish()
        if not result.success:
            return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``python -m stackgen``."""
    args = _build_parser().parse_args(argv)
    setup_logging(args.verbose)

    app = CodeGeneratorApp(Config.from_env())

    if args.command == "stacks":
        for stack in Stack:
            console.print(f"  {stack.value}")
        return 0

    if args.command == "status":
        prefs = app.store.prefs
        print_summary_table(
            {
                "App name": prefs.app_name,
                "Description": prefs.app_desc,
                "Stack": Stack.parse(prefs.stack).value,
                "Custom language": prefs.custom_lang or "-",
                "Credits": str(prefs.credits),
                "GitHub": "connected" if prefs.gh_token else "not connected",
            },
            title="stackgen",
        )
        return 0

    if args.command == "set":
        unknown_stack = (
            args.stack is not None
            and Stack.parse(args.stack) is Stack.CUSTOM
            and args.stack.strip().lower() != "custom"
        )
        if unknown_stack:
            print_warning(f"Unknown stack {args.stack!r}; Custom will be used.")
        app.update(
            app_name=args.app_name,
            description=args.description,
            stack=args.stack,
            custom_lang=args.custom_lang,
        )
        return 0

    if args.command == "connect":
        return 0 if app.connect_github(args.token) else 1

    if args.command == "disconnect":
        app.disconnect_github()
        return 0

    return asyncio.run(_generate(app, args))


if __name__ == "__main__":
    sys.exit(main())
