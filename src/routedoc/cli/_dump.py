"""``routedoc dump``: print the collated documentation report."""

import argparse
import sys

from routedoc.cli._resolve import resolve_target
from routedoc.config import ReportConfig
from routedoc.errors import RoutedocError
from routedoc.render import dump


def run_dump(args: argparse.Namespace) -> None:
    """Resolve ``args.app``, walk and collate it, and print the report."""
    try:
        app, registry = resolve_target(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    config = ReportConfig(
        show_handlers=args.handlers,
        show_empty_buckets=not args.documented_only,
    )

    try:
        collated = registry.collate(app, config=config)
    except RoutedocError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    dump(collated, config=config)
