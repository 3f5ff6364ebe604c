"""Request context: where the current request is addressed, plus ambient ContextVars.

Provides:
- ``RequestContext``: frozen host/scheme/port snapshot the router reads for
  host constraints and absolute URLs.
- ``context_var``: the ``RequestContext`` for this task/thread.
- ``match_var``: the ``RouteMatch`` chosen for the current request.

Both variables are set by the ASGI adapter and reset after each request.
Outside a request, accessing them raises ``LookupError``.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local under
    threads. No locks needed.
"""

import os
from collections.abc import Mapping
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

from waypoint.errors import ConfigurationError
from waypoint.http.request import Request, split_host_port
from waypoint.routing.route import RouteMatch

DEFAULT_PORTS: dict[str, int] = {"http": 80, "https": 443, "ws": 80, "wss": 443}


@dataclass(frozen=True, slots=True)
class RequestContext:
    """Where the current request was addressed. Immutable.

    Build one explicitly for CLI or worker code::

        ctx = RequestContext(host="shop.test", scheme="https")
        ctx.scheme_and_http_host  -> "https://shop.test"
    """

    host: str = "localhost"
    scheme: str = "http"
    port: int | None = None

    @property
    def http_host(self) -> str:
        """``host[:port]``, leaving out the scheme's default port."""
        if self.port is None or DEFAULT_PORTS.get(self.scheme) == self.port:
            return self.host
        return f"{self.host}:{self.port}"

    @property
    def scheme_and_http_host(self) -> str:
        """``scheme://host[:port]``, the prefix for absolute URLs."""
        return f"{self.scheme}://{self.http_host}"

    @classmethod
    def from_url(cls, url: str) -> "RequestContext":
        """Build a context from a base URL such as ``https://shop.test:8443``."""
        parts = urlsplit(url)
        if not parts.scheme or not parts.hostname:
            msg = f"Base URL {url!r} must include a scheme and host"
            raise ConfigurationError(msg)
        try:
            port = parts.port
        except ValueError as exc:
            msg = f"Base URL {url!r} has an invalid port"
            raise ConfigurationError(msg) from exc
        return cls(host=parts.hostname, scheme=parts.scheme.lower(), port=port)

    @classmethod
    def from_request(cls, request: Request) -> "RequestContext":
        """Build a context from an incoming request."""
        return cls(host=request.host or "localhost", scheme=request.scheme, port=request.port)

    @classmethod
    def from_scope(cls, scope: Mapping[str, Any]) -> "RequestContext":
        """Build a context from an ASGI HTTP scope."""
        return cls.from_request(Request.from_asgi(scope))

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> "RequestContext":
        """Build a context from CGI/WSGI-style variables (default: ``os.environ``).

        Reads ``HTTP_HOST`` (falling back to ``SERVER_NAME``/``SERVER_PORT``)
        and ``REQUEST_SCHEME``/``wsgi.url_scheme``/``HTTPS`` for the scheme.
        """
        if environ is None:
            environ = os.environ

        scheme = environ.get("REQUEST_SCHEME") or environ.get("wsgi.url_scheme")
        if not scheme:
            https = environ.get("HTTPS", "").lower()
            scheme = "https" if https in ("on", "1", "true") else "http"

        http_host = environ.get("HTTP_HOST")
        if http_host:
            host, port = split_host_port(http_host)
        else:
            host = environ.get("SERVER_NAME", "localhost").lower()
            server_port = environ.get("SERVER_PORT", "")
            port = int(server_port) if server_port.isdigit() else None
        return cls(host=host, scheme=scheme.lower(), port=port)


# -- Ambient context --

context_var: ContextVar[RequestContext] = ContextVar("waypoint_context")
"""The context of the request being handled. Set by the ASGI adapter."""

match_var: ContextVar[RouteMatch] = ContextVar("waypoint_match")
"""The route matched for the request being handled. Set by the ASGI adapter."""


def get_context() -> RequestContext:
    """Return the current request context.

    Raises ``LookupError`` if called outside a request.
    """
    return context_var.get()


def get_current_match() -> RouteMatch:
    """Return the route match for the current request.

    Raises ``LookupError`` if called outside a request or before matching.
    """
    return match_var.get()
