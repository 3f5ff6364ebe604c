"""Invoke helpers — call sync or async handlers uniformly.

Handlers can be ``def`` or ``async def``. Sync handlers run in a worker
thread so they never block the event loop; ``anyio.to_thread`` copies the
current context, so ``get_context()`` and ``get_current_match()`` work
inside them.

Usage::

    from waypoint._internal.invoke import invoke

    result = await invoke(handler, *args, **kwargs)
"""

import functools
import inspect
from typing import Any

import anyio.to_thread


async def invoke(handler: Any, /, *args: Any, **kwargs: Any) -> Any:
    """Call a handler, in a worker thread if it is synchronous."""
    if inspect.iscoroutinefunction(handler):
        return await handler(*args, **kwargs)
    result = await anyio.to_thread.run_sync(functools.partial(handler, *args, **kwargs))
    if inspect.isawaitable(result):
        result = await result
    return result
