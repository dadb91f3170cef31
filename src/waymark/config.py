"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, threaded
explicitly into the table builders and the dispatcher instead of being
looked up from process globals.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from waymark.errors import ConfigurationError

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    msg = f"{name} must be a boolean (true/false), got {value!r}"
    raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(subdir="/app", auth_default=True)
    """

    # Mount prefix stripped from request paths before matching
    subdir: str = ""

    # Directory holding declarative route files
    routes_dir: str = "routes"
    route_suffixes: tuple[str, ...] = (".yaml", ".yml")

    # Fallback for routes that don't declare ``auth``
    auth_default: bool = False

    debug: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "RouterConfig":
        """Build a config from ``WAYMARK_*`` environment variables.

        Reads ``WAYMARK_SUBDIR``, ``WAYMARK_ROUTES_DIR``, ``WAYMARK_AUTH``
        and ``WAYMARK_DEBUG``. Unset variables keep their defaults.

        Raises ``ConfigurationError`` if a boolean variable can't be parsed.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            subdir=env.get("WAYMARK_SUBDIR", defaults.subdir),
            routes_dir=env.get("WAYMARK_ROUTES_DIR", defaults.routes_dir),
            auth_default=_parse_bool("WAYMARK_AUTH", env["WAYMARK_AUTH"])
            if "WAYMARK_AUTH" in env
            else defaults.auth_default,
            debug=_parse_bool("WAYMARK_DEBUG", env["WAYMARK_DEBUG"])
            if "WAYMARK_DEBUG" in env
            else defaults.debug,
        )
