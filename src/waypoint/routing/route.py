"""Route and RouteMatch frozen dataclasses."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    ``methods`` is normalised to upper case; an empty set accepts any
    method. ``host`` of ``None`` accepts any host.
    """

    name: str
    path: str
    methods: frozenset[str] = frozenset()
    host: str | None = None
    ignore_global_prefix: bool = False

    def __post_init__(self) -> None:
        methods: Iterable[str] = self.methods
        if isinstance(methods, str):
            methods = (methods,)
        object.__setattr__(self, "methods", frozenset(m.upper() for m in methods))

    def allows(self, method: str) -> bool:
        """Whether *method* passes this route's method whitelist."""
        return not self.methods or method.upper() in self.methods


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match. ``path_params`` is read-only."""

    route: Route
    path_params: Mapping[str, str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "path_params", MappingProxyType(dict(self.path_params)))
