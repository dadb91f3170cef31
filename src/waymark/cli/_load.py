"""Route directory loading shared by ``waymark routes`` and ``waymark match``."""

import sys

from waymark.config import RouterConfig
from waymark.discovery import DiscoveryProblem, load_routes
from waymark.errors import DiscoveryError
from waymark.routing.table import RouteTable


def load_or_exit(
    directory: str,
    *,
    auth_default: bool = False,
) -> tuple[RouteTable, tuple[DiscoveryProblem, ...]]:
    """Load and compile the routes in *directory*.

    Prints the error and exits with code 1 if the directory can't be read.
    """
    config = RouterConfig(routes_dir=directory, auth_default=auth_default)
    try:
        result = load_routes(directory, config)
    except DiscoveryError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    return RouteTable.from_descriptors(result.descriptors), result.problems
