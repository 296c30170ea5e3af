"""``routedoc routes``: list method routes.

Resolves an import string to a routedoc App and prints one row per
method item: VERB, simplified path, and the container that holds it.
"""

import argparse
import sys

from routedoc.cli._resolve import resolve_target
from routedoc.errors import RoutedocError
from routedoc.render import route_table


def run_routes(args: argparse.Namespace) -> None:
    """List method routes for a routedoc app.

    Paths inside a router are relative to that router's mount points.
    """
    try:
        app, registry = resolve_target(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    try:
        rows = route_table(registry.collate(app))
    except RoutedocError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not rows:
        print("No routes registered.")
        return

    # Column widths
    max_verb = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header

    fmt = f"{{:<{max_verb}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "CONTAINER"))
    sep_len = max_verb + max_path + 4 + max((len(r[2]) for r in rows), default=0)
    print("-" * min(sep_len, 80))
    for verb, path, container in rows:
        print(fmt.format(verb, path, container))
