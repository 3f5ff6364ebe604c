"""Shop — a small route table served over ASGI.

Shows declaration-order matching, a host-bound admin route, and handlers
that build URLs from route names.

Run (any ASGI server):
    cd examples/shop && uvicorn app:app

Inspect from the command line:
    cd examples/shop && python -m waypoint routes app
    cd examples/shop && python -m waypoint url app orders.show id=77 --absolute --base-url https://shop.test
"""

from collections.abc import Mapping
from urllib.parse import parse_qs

from waypoint import Request, Route, RouteCollection, Router
from waypoint.asgi import RouterApp
from waypoint.context import get_current_match

routes = RouteCollection(
    [
        Route("home", "/", frozenset({"GET"})),
        Route("orders.index", "/orders", frozenset({"GET"})),
        # never reached: POST /orders is a 405 from orders.index
        Route("orders.create", "/orders", frozenset({"POST"})),
        Route("orders.show", "/orders/{id}", frozenset({"GET"})),
        Route("search", "/search", frozenset({"GET"})),
        Route("admin", "/admin", host="admin.shop.test"),
        Route("health", "/health"),
    ]
)

router = Router(routes)


def home(request: Request, params: Mapping[str, str]) -> str:
    return f"Try {router.generate_route('orders.show', {'id': 77})}"


def list_orders(request: Request, params: Mapping[str, str]) -> str:
    links = [router.generate_route("orders.show", {"id": i}) for i in (1, 2, 3)]
    return "\n".join(links)


def show_order(request: Request, params: Mapping[str, str]) -> str:
    return f"Order {params['id']} (matched {get_current_match().route.name})"


def search(request: Request, params: Mapping[str, str]) -> str:
    q = parse_qs(request.query_string).get("q", [""])[0]
    next_page = router.generate_route("search", {"q": q, "page": 2})
    return f"Results for {q!r}. Next: {next_page}"


async def admin(request: Request, params: Mapping[str, str]) -> str:
    return "Admin dashboard"


def health(request: Request, params: Mapping[str, str]) -> str:
    return "ok"


app = RouterApp(
    router,
    {
        "home": home,
        "orders.index": list_orders,
        "orders.show": show_order,
        "search": search,
        "admin": admin,
        "health": health,
    },
)
