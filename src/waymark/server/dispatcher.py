"""ASGI dispatcher — normalize, match, guard, invoke.

Each HTTP request is matched against the registry's current table.
The captured placeholders are passed to the handler as keyword
arguments.
"""

import logging
import traceback
from collections.abc import Callable
from typing import Any

from waymark._internal.asgi import HTTPScope, Receive, Scope, Send
from waymark._internal.invoke import invoke, resolve_handler
from waymark.config import RouterConfig
from waymark.errors import Forbidden, HTTPError, MethodNotAllowed, NotFound, Unauthorized
from waymark.routing.normalize import normalize
from waymark.routing.registry import RouteRegistry
from waymark.routing.route import RouteDescriptor, RouteMatch
from waymark.server.sender import Response, send_response, to_response

logger = logging.getLogger("waymark.server")

Guard = Callable[[HTTPScope, RouteDescriptor], Any]


class RouteDispatcher:
    """ASGI 3.0 application dispatching through a ``RouteRegistry``.

    Usage::

        registry = RouteRegistry(load_table("routes", config))
        app = RouteDispatcher(registry, config, guard=is_logged_in)

    *guard* decides access to ``auth`` routes and *admin_guard* to
    ``admin`` routes. Both receive the typed scope and the route and may
    be sync or async. A missing guard denies access to routes that need it.
    """

    __slots__ = ("admin_guard", "config", "guard", "registry")

    def __init__(
        self,
        registry: RouteRegistry,
        config: RouterConfig | None = None,
        *,
        guard: Guard | None = None,
        admin_guard: Guard | None = None,
    ) -> None:
        self.registry = registry
        self.config = config or RouterConfig()
        self.guard = guard
        self.admin_guard = admin_guard

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        http_scope = HTTPScope.from_scope(scope)
        try:
            response = await self.dispatch(http_scope)
        except HTTPError as exc:
            logger.debug("%d %s %s: %s", exc.status, http_scope.method, http_scope.path, exc.detail)
            response = _error_response(exc)
        except Exception:
            logger.exception("500 %s %s", http_scope.method, http_scope.path)
            response = self._internal_error_response()
        await send_response(response, send)

    async def dispatch(self, scope: HTTPScope) -> Response:
        """Resolve and run the handler for *scope*.

        Raises ``HTTPError`` subclasses for 404/405/401/403 outcomes.
        """
        path = normalize(scope.path, self.config.subdir)
        result = self.registry.match(path, verb=scope.method)

        if not isinstance(result, RouteMatch):
            if result.allowed:
                raise MethodNotAllowed(result.allowed)
            raise NotFound(f"No route matches {scope.method} {path!r}")

        route = result.route
        if route.auth and not await _allowed(self.guard, scope, route):
            raise Unauthorized()
        if route.admin and not await _allowed(self.admin_guard, scope, route):
            raise Forbidden()

        handler = resolve_handler(route)
        value = await invoke(handler, **result.params)
        return to_response(value)

    def _internal_error_response(self) -> Response:
        """500 response; in debug mode the body carries the traceback."""
        if self.config.debug:
            body = traceback.format_exc()
            return Response(
                body.encode("utf-8"),
                status=500,
                content_type="text/plain; charset=utf-8",
            )
        return Response(b"Internal Server Error", status=500)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return


async def _allowed(guard: Guard | None, scope: HTTPScope, route: RouteDescriptor) -> bool:
    if guard is None:
        return False
    return bool(await invoke(guard, scope, route))


def _error_response(exc: HTTPError) -> Response:
    detail = exc.detail or f"Error {exc.status}"
    return Response(
        detail.encode("utf-8"),
        status=exc.status,
        content_type="text/plain; charset=utf-8",
        headers=exc.headers,
    )
