"""tinyroute CLI — inspect a router's route table from the shell.

Entry point registered as ``tinyroute`` in ``pyproject.toml``::

    [project.scripts]
    tinyroute = "tinyroute.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``tinyroute`` command."""
    parser = argparse.ArgumentParser(
        prog="tinyroute",
        description="tinyroute — named, reversible client-side routes.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- tinyroute routes -------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument("router", help="Import string (e.g. myapp:router)")

    # -- tinyroute match --------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Show which route handles a path")
    match_parser.add_argument("router", help="Import string (e.g. myapp:router)")
    match_parser.add_argument("path", help="Path to match (e.g. /users/42)")

    # -- tinyroute reverse ------------------------------------------------
    reverse_parser = subparsers.add_parser("reverse", help="Build the path for a named route")
    reverse_parser.add_argument("router", help="Import string (e.g. myapp:router)")
    reverse_parser.add_argument("name", help="Route name")
    reverse_parser.add_argument("params", nargs="*", help="Parameters as key=value")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from tinyroute.cli._routes import run_routes

        run_routes(args)
    elif args.command == "match":
        from tinyroute.cli._match import run_match

        run_match(args)
    elif args.command == "reverse":
        from tinyroute.cli._match import run_reverse

        run_reverse(args)
