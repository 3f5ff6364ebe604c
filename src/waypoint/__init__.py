"""Waypoint — ordered route matching and reverse URL generation.

Match an incoming path, method and host to exactly one named route, or turn
a route name and parameters back into a URL.

Basic usage::

    from waypoint import Route, RouteCollection, Router

    routes = RouteCollection([
        Route("orders.show", "/orders/{id}", frozenset({"GET"})),
        Route("search", "/search"),
    ])
    router = Router(routes)

    router.match_route("/orders/77", "GET").path_params   # {"id": "77"}
    router.generate_route("search", {"q": "cats"})        # "/search?q=cats"

Serve it over ASGI::

    from waypoint.asgi import RouterApp

    app = RouterApp(router, {"orders.show": show_order})
"""

__version__ = "0.1.0"
__all__ = [
    "CompiledPattern",
    "ConfigurationError",
    "HTTPError",
    "InvalidPattern",
    "MethodNotAllowed",
    "Request",
    "RequestContext",
    "Route",
    "RouteCollection",
    "RouteMatch",
    "RouteNotFound",
    "Router",
    "RouterApp",
    "RouterConfig",
    "WaypointError",
    "compile_pattern",
    "get_context",
    "get_current_match",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypoint`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from waypoint.routing.router import Router

        return Router

    if name in ("Route", "RouteMatch"):
        from waypoint.routing import route

        return getattr(route, name)

    if name == "RouteCollection":
        from waypoint.routing.collection import RouteCollection

        return RouteCollection

    if name in ("CompiledPattern", "compile_pattern"):
        from waypoint.routing import pattern

        return getattr(pattern, name)

    if name == "RouterConfig":
        from waypoint.config import RouterConfig

        return RouterConfig

    if name in ("RequestContext", "get_context", "get_current_match"):
        from waypoint import context

        return getattr(context, name)

    if name == "Request":
        from waypoint.http.request import Request

        return Request

    if name == "RouterApp":
        from waypoint.asgi import RouterApp

        return RouterApp

    if name in (
        "ConfigurationError",
        "HTTPError",
        "InvalidPattern",
        "MethodNotAllowed",
        "RouteNotFound",
        "WaypointError",
    ):
        from waypoint import errors

        return getattr(errors, name)

    msg = f"module 'waypoint' has no attribute {name!r}"
    raise AttributeError(msg)
