"""Router import resolution — resolves ``"module:attribute"`` strings to Routers.

Shared by every ``waypoint`` subcommand to locate the route table from a
user-supplied import string.
"""

import argparse
import importlib
import sys

from waypoint.context import RequestContext
from waypoint.errors import ConfigurationError
from waypoint.routing.collection import RouteCollection
from waypoint.routing.router import Router


def resolve_router(import_string: str) -> Router:
    """Resolve an import string to a ``Router``.

    Accepts ``"module:attribute"`` format. When the attribute portion is
    omitted, defaults to ``"router"`` (e.g. ``"myapp.routes"`` resolves to
    ``myapp.routes.router``).

    The attribute may be a ``Router``, a ``RouteCollection`` (wrapped in a
    default ``Router``), or a factory returning either.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a Router or RouteCollection.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "router"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, Router | RouteCollection):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if isinstance(obj, RouteCollection):
        return Router(obj)
    if not isinstance(obj, Router):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a Router or RouteCollection"
        raise TypeError(msg)
    return obj


def load_router(args: argparse.Namespace) -> Router:
    """Resolve ``args.app`` and bind any context given on the command line.

    ``--base-url`` wins over ``--host``. Prints the error and exits 1 when
    the router cannot be resolved or the base URL is malformed.
    """
    try:
        router = resolve_router(args.app)
        base_url = getattr(args, "base_url", None)
        host = getattr(args, "host", None)
        if base_url:
            router = router.with_context(RequestContext.from_url(base_url))
        elif host:
            router = router.with_context(RequestContext(host=host.lower()))
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    return router
