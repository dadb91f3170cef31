"""``waymark match`` — try a request path against a route directory.

Normalizes the path with ``--subdir``, matches it, and prints the route
and captured parameters. Exits with code 1 when nothing matches.
"""

import argparse
import sys

from waymark.cli._load import load_or_exit
from waymark.routing.normalize import normalize
from waymark.routing.route import RouteMatch


def run_match(args: argparse.Namespace) -> None:
    """Match ``args.path`` against the routes in ``args.directory``."""
    table, _ = load_or_exit(args.directory, auth_default=args.auth)

    path = normalize(args.path, args.subdir)
    result = table.match(path, verb=args.verb)

    if not isinstance(result, RouteMatch):
        if result.allowed:
            allowed = ", ".join(sorted(v.upper() for v in result.allowed))
            print(f"No route for {args.verb.upper()} {path} (allowed: {allowed})", file=sys.stderr)
        else:
            print(f"No route matches {path}", file=sys.stderr)
        raise SystemExit(1)

    route = result.route
    print(f"name:       {route.name}")
    print(f"path:       {route.path}")
    print(f"verb:       {route.verb.upper()}")
    if route.controller is not None:
        print(f"controller: {route.controller}")
    if route.method:
        print(f"method:     {route.method}")
    print(f"auth:       {str(route.auth).lower()}")
    print(f"admin:      {str(route.admin).lower()}")
    for key, value in result.params.items():
        print(f"param:      {key}={value}")
