"""Router — first-match route resolution and reverse URL generation.

Routes are tried in declaration order. Each template is compiled on demand;
nothing is cached, so a Router holds no mutable state and can be shared
between threads and tasks.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Protocol, TypeAlias

from waypoint.config import RouterConfig
from waypoint.context import RequestContext, context_var
from waypoint.errors import InvalidPattern, MethodNotAllowed, RouteNotFound
from waypoint.http.query import build_query, is_multi_value, scalar_to_str
from waypoint.routing.collection import RouteCollection
from waypoint.routing.pattern import CompiledPattern, compile_pattern
from waypoint.routing.route import Route, RouteMatch

logger = logging.getLogger("waypoint.routing")

# Called with the skipped route and the compile error
InvalidPatternHook: TypeAlias = Callable[[Route, InvalidPattern], None]


class RequestLike(Protocol):
    """Anything exposing the two fields matching reads."""

    @property
    def path(self) -> str: ...

    @property
    def method(self) -> str: ...


class Router:
    """Matches requests to named routes and generates URLs from them.

    Usage::

        routes = RouteCollection([
            Route("orders.show", "/orders/{id}", frozenset({"GET"})),
        ])
        router = Router(routes, context=RequestContext(host="shop.test", scheme="https"))

        match = router.match_route("/orders/77", "GET")
        match.path_params                                  -> {"id": "77"}
        router.generate_route("orders.show", {"id": "77"})  -> "/orders/77"

    A route whose template cannot be compiled is skipped during matching.
    Each skip is logged on ``waypoint.routing`` and passed to
    *on_invalid_pattern* when given; ``check_patterns()`` lists them up front.

    When *context* is omitted, each call resolves it from ``context_var``
    (set per request by the ASGI adapter), falling back to
    ``RequestContext.from_environ()``.
    """

    __slots__ = ("_config", "_context", "_on_invalid_pattern", "_routes")

    def __init__(
        self,
        routes: RouteCollection | Iterable[Route],
        config: RouterConfig | None = None,
        context: RequestContext | None = None,
        *,
        on_invalid_pattern: InvalidPatternHook | None = None,
    ) -> None:
        if not isinstance(routes, RouteCollection):
            routes = RouteCollection(routes)
        self._routes = routes
        self._config = config or RouterConfig()
        self._context = context
        self._on_invalid_pattern = on_invalid_pattern

    @property
    def routes(self) -> RouteCollection:
        return self._routes

    @property
    def config(self) -> RouterConfig:
        return self._config

    @property
    def context(self) -> RequestContext:
        """The explicit context, else the ambient one, else one from the environment."""
        if self._context is not None:
            return self._context
        try:
            return context_var.get()
        except LookupError:
            return RequestContext.from_environ()

    def with_config(self, config: RouterConfig) -> "Router":
        """Return a copy of this router using *config*."""
        return Router(
            self._routes, config, self._context, on_invalid_pattern=self._on_invalid_pattern
        )

    def with_context(self, context: RequestContext | None) -> "Router":
        """Return a copy of this router bound to *context* (``None`` = ambient)."""
        return Router(
            self._routes, self._config, context, on_invalid_pattern=self._on_invalid_pattern
        )

    def compile(self, route: Route) -> CompiledPattern:
        """Compile *route*'s template with this router's settings.

        Raises ``InvalidPattern``.
        """
        return compile_pattern(
            route.path,
            case_sensitive=self._config.case_sensitive,
            delimiters=self._config.delimiters,
        )

    def check_patterns(self) -> list[tuple[Route, InvalidPattern]]:
        """Return every route whose template would be skipped during matching."""
        invalid: list[tuple[Route, InvalidPattern]] = []
        for route in self._routes:
            try:
                self.compile(route)
            except InvalidPattern as exc:
                invalid.append((route, exc))
        return invalid

    # -- Matching --

    def match_route(self, path: str, method: str) -> RouteMatch:
        """Match *path* and *method* against the routes, in order.

        The first route whose template matches *path* and whose host
        constraint (if any) equals the context host wins the whole
        evaluation: if it rejects *method*, ``MethodNotAllowed`` is raised
        even when a later route would accept it.

        Raises ``RouteNotFound`` if no route matches *path*.
        """
        method = method.upper()
        host: str | None = None

        for route in self._routes:
            try:
                pattern = self.compile(route)
            except InvalidPattern as exc:
                self._report_invalid(route, exc)
                continue

            params = pattern.match(path)
            if params is None:
                continue

            if route.host is not None:
                if host is None:
                    host = self.context.host
                if route.host != host:
                    continue

            if not route.allows(method):
                logger.debug("%s %s matched %r but method is not allowed", method, path, route.name)
                raise MethodNotAllowed(route.methods)

            logger.debug("%s %s matched %r with %r", method, path, route.name, params)
            return RouteMatch(route=route, path_params=params)

        raise RouteNotFound(f"No route matched for URI {path!r}")

    def match_request(self, request: RequestLike) -> RouteMatch:
        """Match a request by its ``path`` and ``method``."""
        return self.match_route(request.path, request.method)

    def _report_invalid(self, route: Route, exc: InvalidPattern) -> None:
        logger.warning("Skipping route %r: %s", route.name, exc)
        if self._on_invalid_pattern is not None:
            self._on_invalid_pattern(route, exc)

    # -- Generation --

    def generate_route(
        self,
        name: str,
        params: Mapping[str, Any] | None = None,
        *,
        absolute: bool = False,
    ) -> str:
        """Build the URL for the route called *name*.

        Scalar parameters replace their ``{key}`` placeholder. Lists,
        tuples, mappings and parameters without a placeholder are appended
        as a query string in mapping order. With *absolute*, the context's
        ``scheme://host[:port]`` is prepended.

        Raises ``RouteNotFound`` if no route has that name.
        """
        route = self._routes.get(name)
        if route is None:
            raise RouteNotFound(f"Route {name!r} is not defined")

        values = dict(params or {})
        prefix = self._config.path_prefix
        if prefix is not None and not route.ignore_global_prefix:
            path = prefix + route.path
            values = {**values, **self._config.global_params}
        else:
            path = route.path

        left, right = self._config.delimiters
        residual: dict[str, Any] = {}
        for key, value in values.items():
            placeholder = f"{left}{key}{right}"
            if not is_multi_value(value) and placeholder in path:
                # False becomes "0", matching the query encoding, not an empty segment
                path = path.replace(placeholder, scalar_to_str(value))
            else:
                residual[key] = value

        query = build_query(residual)
        if query:
            path = f"{path}?{query}"

        if absolute:
            path = self.context.scheme_and_http_host + path

        logger.debug("Generated %r for route %r", path, name)
        return path
