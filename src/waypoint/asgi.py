"""ASGI adapter — serves a Router as an ASGI 3 application.

The only component that touches raw ASGI directly. Converts the scope to a
``Request``, publishes the ``RequestContext`` and ``RouteMatch`` through
context variables, dispatches to the handler registered under the matched
route's name, and sends a plain response back.
"""

import logging
from collections.abc import Callable, Mapping
from contextvars import Token
from typing import Any, TypeAlias

from waypoint._internal.asgi import Receive, Scope, Send
from waypoint._internal.invoke import invoke
from waypoint.context import RequestContext, context_var, match_var
from waypoint.errors import HTTPError
from waypoint.http.request import Request
from waypoint.routing.route import RouteMatch
from waypoint.routing.router import Router

logger = logging.getLogger("waypoint.asgi")

# A handler receives the request and the read-only path parameter mapping
Handler: TypeAlias = Callable[[Request, Mapping[str, str]], Any]


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    return not (100 <= status < 200 or status in {204, 304})


async def send_text(
    send: Send,
    status: int,
    body: str | bytes,
    headers: tuple[tuple[str, str], ...] = (),
) -> None:
    """Send a complete response. ``str`` bodies go out as UTF-8 text."""
    if isinstance(body, str):
        content_type = "text/plain; charset=utf-8"
        payload = body.encode("utf-8")
    else:
        content_type = "application/octet-stream"
        payload = body
    if not _body_allowed(status):
        payload = b""

    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", content_type.encode("latin-1")),
    ]
    for name, value in headers:
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))
    raw_headers.append((b"content-length", str(len(payload)).encode("latin-1")))

    await send({"type": "http.response.start", "status": status, "headers": raw_headers})
    await send({"type": "http.response.body", "body": payload})


class RouterApp:
    """ASGI application dispatching by route name.

    Usage::

        def show_order(request, params):
            return f"order {params['id']}"

        app = RouterApp(router, {"orders.show": show_order})

    Handlers are called as ``handler(request, params)``, so placeholder
    names such as ``handler``, ``request`` or ``order-id`` reach them as
    mapping keys. Handlers may be sync or async and must return ``str``
    or ``bytes``.
    ``RouteNotFound`` and ``MethodNotAllowed`` become 404 and 405 responses
    (the latter with an ``Allow`` header); other ``HTTPError`` raised by a
    handler use their own status. Anything else is logged and answered
    with a 500.
    """

    __slots__ = ("_handlers", "_router")

    def __init__(self, router: Router, handlers: Mapping[str, Handler]) -> None:
        self._router = router
        self._handlers = dict(handlers)

    @property
    def router(self) -> Router:
        return self._router

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            msg = f"Unsupported ASGI scope type {scope['type']!r}"
            raise ValueError(msg)

        request = Request.from_asgi(scope)
        context_token: Token[RequestContext] = context_var.set(RequestContext.from_request(request))
        try:
            await self._dispatch(request, send)
        finally:
            context_var.reset(context_token)

    async def _dispatch(self, request: Request, send: Send) -> None:
        try:
            match = self._router.match_request(request)
        except HTTPError as exc:
            logger.debug("%s %s -> %d", request.method, request.path, exc.status)
            await send_text(send, exc.status, exc.detail, exc.headers)
            return

        handler = self._handlers.get(match.route.name)
        if handler is None:
            logger.error("No handler registered for route %r", match.route.name)
            await send_text(send, 500, "Internal Server Error")
            return

        match_token: Token[RouteMatch] = match_var.set(match)
        try:
            result = await invoke(handler, request, match.path_params)
        except HTTPError as exc:
            await send_text(send, exc.status, exc.detail, exc.headers)
            return
        except Exception:
            logger.exception("Handler for route %r failed", match.route.name)
            await send_text(send, 500, "Internal Server Error")
            return
        finally:
            match_var.reset(match_token)

        if not isinstance(result, str | bytes):
            logger.error(
                "Handler for route %r returned %s, expected str or bytes",
                match.route.name,
                type(result).__name__,
            )
            await send_text(send, 500, "Internal Server Error")
            return

        logger.debug("%s %s -> 200 (%s)", request.method, request.path, match.route.name)
        await send_text(send, 200, result)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Acknowledge lifespan startup and shutdown.

        Startup logs every route whose template cannot be compiled; those
        routes are skipped while serving.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                for route, exc in self._router.check_patterns():
                    logger.warning("Route %r will never match: %s", route.name, exc)
                await send({"type": "lifespan.startup.complete"})
            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
