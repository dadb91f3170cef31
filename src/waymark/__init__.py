"""Waymark — route discovery and first-match route matching.

Build a route table once, match request paths against it per request.

Basic usage::

    from waymark import RouteDescriptor, RouteTable, normalize

    table = RouteTable.from_descriptors([
        RouteDescriptor(path="/users/{id}", name="users.show"),
    ])
    result = table.match(normalize("/app/users/42/", "/app"))
    if result:
        print(result.name, result.params)

Route files::

    from waymark.discovery import load_table
    table = load_table("routes", RouterConfig(auth_default=True))
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "DiscoveryError",
    "InvalidRouteError",
    "NoMatch",
    "PatternError",
    "RouteDescriptor",
    "RouteDispatcher",
    "RouteMatch",
    "RouteRegistry",
    "RouteTable",
    "RouteTableBuilder",
    "RouterConfig",
    "WaymarkError",
    "compile_pattern",
    "match",
    "normalize",
    "route",
]

_LAZY: dict[str, str] = {
    "RouterConfig": "waymark.config",
    "ConfigurationError": "waymark.errors",
    "DiscoveryError": "waymark.errors",
    "InvalidRouteError": "waymark.errors",
    "PatternError": "waymark.errors",
    "WaymarkError": "waymark.errors",
    "NoMatch": "waymark.routing.route",
    "RouteDescriptor": "waymark.routing.route",
    "RouteMatch": "waymark.routing.route",
    "RouteTable": "waymark.routing.table",
    "match": "waymark.routing.table",
    "compile_pattern": "waymark.routing.pattern",
    "normalize": "waymark.routing.normalize",
    "RouteRegistry": "waymark.routing.registry",
    "RouteTableBuilder": "waymark.routing.builder",
    "route": "waymark.routing.builder",
    "RouteDispatcher": "waymark.server.dispatcher",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waymark`` fast while providing a clean top-level API.
    """
    module_path = _LAZY.get(name)
    if module_path is None:
        msg = f"module 'waymark' has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_path), name)
