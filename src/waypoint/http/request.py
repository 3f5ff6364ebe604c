"""Immutable HTTP request metadata.

The router only ever reads ``path`` and ``method``; host, scheme and port
feed the ``RequestContext`` used for host constraints and absolute URLs.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any


def split_host_port(value: str) -> tuple[str, int | None]:
    """Split a ``Host`` header value into ``(host, port)``.

    Handles bracketed IPv6 literals (``[::1]:8000``). The host is lower-cased.
    """
    value = value.strip()
    if value.startswith("["):
        end = value.find("]")
        if end != -1:
            host, rest = value[: end + 1], value[end + 1 :]
            port = rest[1:] if rest.startswith(":") else ""
            return host.lower(), int(port) if port.isdigit() else None
    host, sep, port = value.rpartition(":")
    if sep and port.isdigit():
        return host.lower(), int(port)
    return value.lower(), None


def _host_header(raw_headers: Iterable[tuple[bytes, bytes]]) -> str | None:
    for name, value in raw_headers:
        if name.lower() == b"host":
            return value.decode("latin-1")
    return None


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request, without a body.

    Created once per request by the ASGI adapter (or directly in tests and
    CLI tools). ``host`` is lower-cased and empty when the request carried
    no ``Host`` header and no server address.
    """

    method: str
    path: str
    query_string: str = ""
    scheme: str = "http"
    host: str = ""
    port: int | None = None
    root_path: str = ""

    @property
    def url(self) -> str:
        """Request path plus query string."""
        if self.query_string:
            return f"{self.path}?{self.query_string}"
        return self.path

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any]) -> Request:
        """Create a Request from an ASGI HTTP scope.

        The address comes from the ``Host`` header, else the ``server`` pair.
        """
        header = _host_header(scope.get("headers", ()))
        server = scope.get("server")
        if header:
            host, port = split_host_port(header)
        elif server:
            host, port = str(server[0]).lower(), server[1]
        else:
            host, port = "", None
        return cls(
            method=scope["method"],
            path=scope["path"],
            query_string=scope.get("query_string", b"").decode("latin-1"),
            scheme=scope.get("scheme", "http"),
            host=host,
            port=port,
            root_path=scope.get("root_path", ""),
        )
