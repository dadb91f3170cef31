"""Waymark CLI — inspect route files and try paths against them.

Entry point registered as ``waymark`` in ``pyproject.toml``::

    [project.scripts]
    waymark = "waymark.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``waymark`` command."""
    parser = argparse.ArgumentParser(
        prog="waymark",
        description="Waymark — route discovery and first-match route matching.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    # -- waymark routes ---------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List routes from a route directory")
    routes_parser.add_argument("directory", help="Directory containing YAML route files")
    routes_parser.add_argument(
        "--auth",
        action="store_true",
        help="Require authentication for routes that don't say otherwise",
    )

    # -- waymark match ----------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Match a request path against routes")
    match_parser.add_argument("directory", help="Directory containing YAML route files")
    match_parser.add_argument("path", help="Request path (e.g. /users/42)")
    match_parser.add_argument("--subdir", default="", help="Mount prefix to strip")
    match_parser.add_argument("--verb", default=None, help="Only match routes for this verb")
    match_parser.add_argument(
        "--auth",
        action="store_true",
        help="Require authentication for routes that don't say otherwise",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "routes":
        from waymark.cli._routes import run_routes

        run_routes(args)
    elif args.command == "match":
        from waymark.cli._match import run_match

        run_match(args)
