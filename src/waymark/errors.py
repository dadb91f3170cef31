"""Waymark exception hierarchy.

Shared across the route table, discovery, and the dispatcher so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class WaymarkError(Exception):
    """Base for all waymark-specific errors."""


class ConfigurationError(WaymarkError):
    """Raised when router configuration is invalid."""


class InvalidRouteError(WaymarkError):
    """A route declaration is missing required fields or has bad values.

    Raised while building a ``RouteDescriptor``. Table builders catch it
    and exclude the entry, so it never surfaces at match time.
    """


class PatternError(WaymarkError):
    """A route path template could not be compiled."""

    def __init__(self, template: str, reason: str) -> None:
        self.template = template
        self.reason = reason
        super().__init__(f"Invalid route template {template!r}: {reason}")


class DiscoveryError(WaymarkError):
    """Route files could not be read (missing or unreadable directory)."""


@dataclass(frozen=True, slots=True)
class HTTPError(WaymarkError):
    """An error that maps directly to an HTTP status code.

    Raised inside the dispatcher and turned into a plain response.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(v.upper() for v in allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )


class Unauthorized(HTTPError):  # noqa: N818
    """401 — the route requires authentication."""

    def __init__(self, detail: str = "Unauthorized") -> None:
        super().__init__(status=401, detail=detail)


class Forbidden(HTTPError):  # noqa: N818
    """403 — the route requires admin privileges."""

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(status=403, detail=detail)
