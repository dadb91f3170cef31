"""RouteDescriptor, RouteMatch and NoMatch frozen dataclasses."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from waymark.errors import InvalidRouteError

DEFAULT_VERB = "get"


def _require_str(key: str, value: Any) -> str:
    if not isinstance(value, str):
        msg = f"Route field {key!r} must be a string, got {type(value).__name__}"
        raise InvalidRouteError(msg)
    return value


def _coerce_bool(key: str, value: Any) -> bool:
    """Accept YAML booleans and the literal strings ``true``/``false``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    msg = f"Route field {key!r} must be a boolean, got {value!r}"
    raise InvalidRouteError(msg)


@dataclass(frozen=True, slots=True)
class RouteDescriptor:
    """A frozen route declaration.

    ``path`` and ``name`` are mandatory. ``verb`` is stored lower-cased.
    """

    path: str
    name: str
    controller: Any = None
    method: str | None = None
    verb: str = DEFAULT_VERB
    auth: bool = False
    admin: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.path, str) or not self.path:
            msg = f"Route {self.name!r} has no path"
            raise InvalidRouteError(msg)
        if not isinstance(self.name, str) or not self.name:
            msg = f"Route {self.path!r} has no name"
            raise InvalidRouteError(msg)
        if not isinstance(self.verb, str) or not self.verb:
            msg = f"Route {self.name!r} has an invalid verb {self.verb!r}"
            raise InvalidRouteError(msg)
        object.__setattr__(self, "verb", self.verb.lower())

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        *,
        auth_default: bool = False,
    ) -> "RouteDescriptor":
        """Build a descriptor from a raw mapping (e.g. one YAML entry).

        Missing ``verb`` falls back to ``get``, missing ``auth`` to
        *auth_default*, missing ``admin`` to ``False``.

        Raises ``InvalidRouteError`` if ``path`` or ``name`` is missing
        or a field has the wrong type.
        """
        if not isinstance(data, Mapping):
            msg = f"Route entry must be a mapping, got {type(data).__name__}"
            raise InvalidRouteError(msg)

        for key in ("path", "name"):
            if not data.get(key):
                msg = f"Route entry is missing required field {key!r}"
                raise InvalidRouteError(msg)

        path = _require_str("path", data["path"])
        name = data["name"]
        # YAML reads `name: 404` as an int
        name = str(name) if isinstance(name, int) and not isinstance(name, bool) else name
        name = _require_str("name", name)
        method = data.get("method")
        verb = data.get("verb") or DEFAULT_VERB
        auth = data.get("auth")
        admin = data.get("admin")
        return cls(
            path=path,
            name=name,
            controller=data.get("controller"),
            method=None if method is None else _require_str("method", method),
            verb=_require_str("verb", verb),
            auth=auth_default if auth is None else _coerce_bool("auth", auth),
            admin=False if admin is None else _coerce_bool("admin", admin),
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict view, e.g. for listing routes."""
        return {
            "path": self.path,
            "name": self.name,
            "controller": self.controller,
            "method": self.method,
            "verb": self.verb,
            "auth": self.auth,
            "admin": self.admin,
        }


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match.

    ``route`` is the descriptor from the table, unchanged. Hashing uses
    the route only; ``params`` still takes part in equality.
    """

    route: RouteDescriptor
    params: dict[str, str] = field(default_factory=dict, hash=False)

    def __bool__(self) -> bool:
        return True

    @property
    def name(self) -> str:
        return self.route.name

    @property
    def verb(self) -> str:
        return self.route.verb

    @property
    def controller(self) -> Any:
        return self.route.controller

    @property
    def method(self) -> str | None:
        return self.route.method

    @property
    def auth(self) -> bool:
        return self.route.auth

    @property
    def admin(self) -> bool:
        return self.route.admin


@dataclass(frozen=True, slots=True)
class NoMatch:
    """No route matched the request path.

    ``allowed`` holds the verbs of routes whose pattern matched but were
    filtered out by verb. Empty when nothing matched the path at all.
    """

    path: str
    allowed: frozenset[str] = frozenset()

    def __bool__(self) -> bool:
        return False
