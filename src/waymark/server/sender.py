"""Responses and ASGI sending.

Handlers return plain values; ``to_response`` turns them into a
``Response`` and ``send_response`` writes it as ASGI messages.
"""

import json
from dataclasses import dataclass
from typing import Any

from waymark._internal.asgi import Send


@dataclass(frozen=True, slots=True)
class Response:
    """A complete, non-streaming HTTP response."""

    body: bytes = b""
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()


def to_response(value: Any) -> Response:
    """Convert a handler return value into a ``Response``.

    Accepts ``Response``, ``str`` (HTML), ``bytes``, ``dict``/``list``
    (JSON), ``None`` (204) and ``(value, status)`` tuples.
    """
    if isinstance(value, tuple) and len(value) == 2 and isinstance(value[1], int):
        inner = to_response(value[0])
        return Response(inner.body, value[1], inner.content_type, inner.headers)
    if isinstance(value, Response):
        return value
    if value is None:
        return Response(status=204)
    if isinstance(value, str):
        return Response(value.encode("utf-8"))
    if isinstance(value, bytes):
        return Response(value, content_type="application/octet-stream")
    if isinstance(value, (dict, list)):
        return Response(json.dumps(value).encode("utf-8"), content_type="application/json")
    msg = f"Cannot convert {type(value).__name__} to a response"
    raise TypeError(msg)


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: Response, send: Send) -> None:
    """Translate a ``Response`` into ASGI send() calls."""
    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
    ]
    for name, value in response.headers:
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    body = response.body if _body_allowed(response.status) else b""
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )
