"""Route Collection — ordered, name-indexed route table.

Iteration order is match priority: the router tries routes in the order
they were added and stops at the first structural and host match.
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from waypoint.errors import ConfigurationError
from waypoint.routing.route import Route


class RouteCollection:
    """Ordered collection of routes with name-based lookup.

    Usage::

        routes = RouteCollection()
        routes.add(Route("orders.show", "/orders/{id}", frozenset({"GET"})))
        routes.get("orders.show")
    """

    __slots__ = ("_by_name", "_routes")

    def __init__(self, routes: Iterable[Route] = ()) -> None:
        self._routes: list[Route] = []
        self._by_name: dict[str, Route] = {}
        for route in routes:
            self.add(route)

    def add(self, route: Route) -> Route:
        """Append a route. Raises ``ConfigurationError`` on a duplicate name."""
        existing = self._by_name.get(route.name)
        if existing is not None:
            msg = (
                f"Duplicate route name {route.name!r}: "
                f"already bound to {existing.path!r}, cannot rebind to {route.path!r}"
            )
            raise ConfigurationError(msg)
        self._routes.append(route)
        self._by_name[route.name] = route
        return route

    def get(self, name: str) -> Route | None:
        """Return the route called *name*, or ``None``."""
        return self._by_name.get(name)

    @property
    def names(self) -> list[str]:
        """Route names in declaration order."""
        return [route.name for route in self._routes]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Mapping[str, Any]]) -> "RouteCollection":
        """Build a collection from ``{name: {"path": ..., ...}}`` configuration.

        Recognised keys per route: ``path`` (required), ``methods``,
        ``host``, ``ignore_global_prefix``. Mapping order is kept.
        """
        collection = cls()
        for name, definition in data.items():
            if "path" not in definition:
                msg = f"Route {name!r} has no 'path'"
                raise ConfigurationError(msg)
            unknown = sorted(set(definition) - {"path", "methods", "host", "ignore_global_prefix"})
            if unknown:
                msg = f"Route {name!r} has unknown keys: {', '.join(unknown)}"
                raise ConfigurationError(msg)
            collection.add(
                Route(
                    name=name,
                    path=definition["path"],
                    methods=definition.get("methods") or frozenset(),
                    host=definition.get("host"),
                    ignore_global_prefix=bool(definition.get("ignore_global_prefix", False)),
                )
            )
        return collection

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __repr__(self) -> str:
        return f"<RouteCollection ({len(self._routes)} routes)>"
