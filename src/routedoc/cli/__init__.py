"""Routedoc CLI: print route documentation for an app.

Entry point registered as ``routedoc`` in ``pyproject.toml``::

    [project.scripts]
    routedoc = "routedoc.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``routedoc`` command."""
    parser = argparse.ArgumentParser(
        prog="routedoc",
        description="Documentation reports for routing trees.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log walker diagnostics to stderr",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- routedoc dump ----------------------------------------------------
    dump_parser = subparsers.add_parser("dump", help="Print the collated documentation report")
    dump_parser.add_argument(
        "app",
        help="Import string (e.g. myapp:app)",
    )
    dump_parser.add_argument(
        "--handlers",
        action="store_true",
        help="Include handler names in the report",
    )
    dump_parser.add_argument(
        "--documented-only",
        action="store_true",
        help="Skip paths where no item carries a doc",
    )

    # -- routedoc routes --------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List method routes per container")
    routes_parser.add_argument(
        "app",
        help="Import string (e.g. myapp:app)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.command == "dump":
        from routedoc.cli._dump import run_dump

        run_dump(args)
    elif args.command == "routes":
        from routedoc.cli._routes import run_routes

        run_routes(args)
