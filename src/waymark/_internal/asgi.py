"""Typed ASGI definitions.

Raw aliases for the ASGI callables plus a typed view of the handful of
scope fields the dispatcher reads.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from dataclasses import dataclass
from typing import Any, TypeAlias

Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class HTTPScope:
    """Typed HTTP scope parsed from a raw ASGI scope dict."""

    method: str
    path: str
    headers: tuple[tuple[bytes, bytes], ...]

    @classmethod
    def from_scope(cls, scope: Scope) -> "HTTPScope":
        return cls(
            method=scope.get("method", "GET"),
            path=scope.get("path", "/") or "/",
            headers=tuple(scope.get("headers", ())),
        )

    def header(self, name: str) -> str | None:
        """First value of header *name* (case-insensitive), decoded latin-1."""
        key = name.lower().encode("latin-1")
        for raw_name, raw_value in self.headers:
            if raw_name.lower() == key:
                return raw_value.decode("latin-1")
        return None
