"""Route discovery — declarative YAML route files.

    from waymark.discovery import load_routes, load_table
"""

from waymark.discovery.routes_files import (
    DiscoveryProblem,
    DiscoveryResult,
    ProblemKind,
    load_routes,
    load_table,
)

__all__ = [
    "DiscoveryProblem",
    "DiscoveryResult",
    "ProblemKind",
    "load_routes",
    "load_table",
]
