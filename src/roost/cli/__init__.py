"""Roost CLI — list the routes a controllers directory mounts.

Entry point registered as ``roost`` in ``pyproject.toml``::

    [project.scripts]
    roost = "roost.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``roost`` command."""
    parser = argparse.ArgumentParser(
        prog="roost",
        description="Roost — mount controllers from a directory tree and list their routes.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- roost routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List mounted routes")
    source = routes_parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "controllers_dir",
        nargs="?",
        default=None,
        help="Controllers directory to load into a fresh app",
    )
    source.add_argument(
        "--app",
        default=None,
        help="Import string of an existing app or router (e.g. myapp:app)",
    )
    routes_parser.add_argument("--base", default="/", help="Base route for mounted controllers")
    routes_parser.add_argument(
        "--attr",
        default="controller",
        help="Module attribute holding the controller callable",
    )
    routes_parser.add_argument(
        "--suffix",
        action="append",
        default=None,
        help="Controller file suffix (repeatable, default .py)",
    )
    routes_parser.add_argument("--title", default=None, help="Title line for the report")
    routes_parser.add_argument(
        "--dedupe",
        choices=("entry", "line"),
        default="entry",
        help="Dedup on (method, path) or on the rendered line",
    )
    routes_parser.add_argument(
        "--color",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Force color on or off (default: auto-detect TTY)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from roost.cli._routes import run_routes

        run_routes(args)
