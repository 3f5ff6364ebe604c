"""Waypoint exception hierarchy.

Shared across the pattern compiler, Router, ASGI adapter, and CLI so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class WaypointError(Exception):
    """Base for all waypoint-specific errors."""


class ConfigurationError(WaypointError):
    """Raised when router configuration or a route table is invalid."""


class InvalidPattern(ConfigurationError):  # noqa: N818
    """A path template cannot be compiled into a matcher.

    Raised by ``compile_pattern``. The router catches it during matching
    and skips the offending route, so it never escapes ``match_route``.
    """

    def __init__(self, template: str, reason: str) -> None:
        self.template = template
        self.reason = reason
        super().__init__(f"Invalid path template {template!r}: {reason}")


@dataclass(frozen=True, slots=True)
class HTTPError(WaypointError):
    """An error that maps directly to an HTTP status code.

    Raised by the router. The ASGI adapter turns these into responses
    carrying ``status`` and ``headers``.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class RouteNotFound(HTTPError):  # noqa: N818
    """404: no route matched the path, or no route has the requested name."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: the first matching route does not accept this HTTP method.

    Includes an ``Allow`` header listing the route's methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )

    @property
    def allowed(self) -> frozenset[str]:
        """The methods accepted by the route that rejected the request."""
        for name, value in self.headers:
            if name == "Allow":
                return frozenset(m.strip() for m in value.split(",") if m.strip())
        return frozenset()
