"""Handler resolution and invocation.

A route's ``controller`` is opaque to the table. At dispatch time it is
turned into something callable here:

- a plain callable is called as-is;
- a class with a route ``method`` is instantiated and the method bound;
- a ``"module:attribute"`` string is imported first.

Handlers can be ``def`` or ``async def``; ``invoke`` awaits when needed.
"""

import importlib
import inspect
from collections.abc import Callable
from typing import Any

from waymark.routing.route import RouteDescriptor


def import_string(target: str) -> Any:
    """Import ``"module:attribute"`` (attribute may be dotted).

    Raises ``ImportError`` if the string is malformed or the attribute
    can't be found.
    """
    module_path, _, attr_path = target.partition(":")
    if not module_path or not attr_path:
        msg = f"{target!r} doesn't look like 'module:attribute'"
        raise ImportError(msg)

    obj: Any = importlib.import_module(module_path)
    try:
        for attr in attr_path.split("."):
            obj = getattr(obj, attr)
    except AttributeError as exc:
        msg = f"Module {module_path!r} does not define {attr_path!r}"
        raise ImportError(msg) from exc
    return obj


def resolve_handler(route: RouteDescriptor) -> Callable[..., Any]:
    """Turn a route's controller (and method) into a callable.

    Raises ``TypeError`` if the controller can't be called.
    """
    controller = route.controller
    if isinstance(controller, str):
        controller = import_string(controller)

    if route.method:
        instance = controller() if inspect.isclass(controller) else controller
        handler = getattr(instance, route.method, None)
    else:
        handler = controller

    if not callable(handler):
        msg = f"Route {route.name!r} has no callable handler ({route.controller!r})"
        raise TypeError(msg)
    return handler


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
