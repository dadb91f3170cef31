"""``waymark routes`` — list routes loaded from a route directory.

Prints a table of VERB, PATH, NAME and CONTROLLER in table order, then
any excluded entries on stderr.
"""

import argparse
import sys

from waymark.cli._load import load_or_exit
from waymark.routing.route import RouteDescriptor


def _controller_label(route: RouteDescriptor) -> str:
    controller = route.controller
    label = controller if isinstance(controller, str) else getattr(controller, "__name__", "")
    label = label or "-"
    if route.method:
        label = f"{label}.{route.method}"
    return label


def _flags(route: RouteDescriptor) -> str:
    flags = [flag for flag, on in (("auth", route.auth), ("admin", route.admin)) if on]
    return ",".join(flags)


def run_routes(args: argparse.Namespace) -> None:
    """List the routes found in ``args.directory``."""
    table, problems = load_or_exit(args.directory, auth_default=args.auth)

    for problem in problems:
        print(f"Skipped: {problem}", file=sys.stderr)
    for skipped in table.skipped:
        label = getattr(skipped.entry, "name", f"#{skipped.index}")
        print(f"Skipped: {label}: {skipped.reason}", file=sys.stderr)

    if not len(table):
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str, str, str]] = [
        (route.verb.upper(), route.path, route.name, _controller_label(route), _flags(route))
        for route in table
    ]
    header = ("VERB", "PATH", "NAME", "CONTROLLER", "FLAGS")
    widths = [max(len(header[i]), *(len(r[i]) for r in rows)) for i in range(4)]

    fmt = "  ".join(f"{{:<{w}}}" for w in widths) + "  {}"
    print(fmt.format(*header))
    sep_len = sum(widths) + 2 * len(widths) + max(len(r[4]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row).rstrip())
