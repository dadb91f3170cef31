"""Code-adjacent route registration.

Handlers declare their own routes at import time, either with the
builder's ``route`` decorator (functions) or with the module-level
``route`` decorator on controller methods, collected by
``RouteTableBuilder.controller``.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, TypeVar

from waymark.config import RouterConfig
from waymark.errors import InvalidRouteError
from waymark.routing.route import RouteDescriptor
from waymark.routing.table import RouteTable, SkippedRoute

logger = logging.getLogger("waymark.routing")

F = TypeVar("F", bound=Callable[..., Any])

# Attribute set on controller methods by ``route``
ROUTE_ATTR = "__waymark_routes__"


@dataclass(frozen=True, slots=True)
class RouteSpec:
    """Route metadata attached to a controller method."""

    path: str
    name: str
    verb: str | None = None
    auth: bool | None = None
    admin: bool = False


def route(
    path: str,
    *,
    name: str,
    verb: str | None = None,
    auth: bool | None = None,
    admin: bool = False,
) -> Callable[[F], F]:
    """Mark a controller method as a route.

    Stack it to expose one method under several routes::

        class UserController:
            @route("/users", name="users.index")
            def index(self): ...

            @route("/users/{id}", name="users.show")
            def show(self, id): ...
    """

    def decorator(func: F) -> F:
        specs = getattr(func, ROUTE_ATTR, ())
        # Decorators apply bottom-up; prepend to keep source order
        setattr(func, ROUTE_ATTR, (RouteSpec(path, name, verb, auth, admin), *specs))
        return func

    return decorator


class RouteTableBuilder:
    """Collects route registrations and builds a ``RouteTable``.

    Usage::

        builder = RouteTableBuilder(RouterConfig(auth_default=True))

        @builder.route("/health", name="health", auth=False)
        def health():
            return "ok"

        builder.controller(UserController)
        table = builder.build()
    """

    __slots__ = ("_config", "_count", "_indices", "_pending", "_skipped")

    def __init__(self, config: RouterConfig | None = None) -> None:
        self._config = config or RouterConfig()
        self._pending: list[RouteDescriptor] = []
        # Registration position of each pending descriptor, skips included
        self._indices: list[int] = []
        self._skipped: list[SkippedRoute] = []
        self._count = 0

    def add(
        self,
        path: str,
        name: str,
        controller: Any = None,
        *,
        method: str | None = None,
        verb: str | None = None,
        auth: bool | None = None,
        admin: bool = False,
    ) -> RouteDescriptor | None:
        """Register one route. Returns None if the declaration is invalid."""
        index = self._count
        self._count += 1
        try:
            descriptor = RouteDescriptor(
                path=path,
                name=name,
                controller=controller,
                method=method,
                verb=verb or "get",
                auth=self._config.auth_default if auth is None else auth,
                admin=admin,
            )
        except InvalidRouteError as exc:
            entry = {"path": path, "name": name, "controller": controller}
            self._skipped.append(SkippedRoute(index, entry, str(exc)))
            logger.warning("Skipping route registration: %s", exc)
            return None
        self._pending.append(descriptor)
        self._indices.append(index)
        return descriptor

    def route(
        self,
        path: str,
        *,
        name: str,
        verb: str | None = None,
        auth: bool | None = None,
        admin: bool = False,
    ) -> Callable[[F], F]:
        """Register a function as a route handler via decorator."""

        def decorator(func: F) -> F:
            self.add(path, name, func, verb=verb, auth=auth, admin=admin)
            return func

        return decorator

    def controller(self, cls: type) -> type:
        """Register every ``@route``-marked method of *cls*, in definition order.

        Usable as a class decorator.
        """
        for attr_name, attr in vars(cls).items():
            for spec in getattr(attr, ROUTE_ATTR, ()):
                self.add(
                    spec.path,
                    spec.name,
                    cls,
                    method=attr_name,
                    verb=spec.verb,
                    auth=spec.auth,
                    admin=spec.admin,
                )
        return cls

    def extend(self, descriptors: Iterable[RouteDescriptor]) -> None:
        """Append pre-built descriptors (e.g. loaded from route files)."""
        for descriptor in descriptors:
            self._pending.append(descriptor)
            self._indices.append(self._count)
            self._count += 1

    def build(self) -> RouteTable:
        """Compile everything registered so far into a new table."""
        return RouteTable.from_descriptors(list(self._pending), self._skipped, self._indices)

    def __len__(self) -> int:
        return len(self._pending)
