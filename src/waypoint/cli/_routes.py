"""``waypoint routes`` — list declared routes in match order."""

import argparse

from waypoint.cli._resolve import load_router


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of NAME, METHODS, HOST and PATH for every route."""
    router = load_router(args)

    rows: list[tuple[str, str, str, str]] = [
        (
            route.name,
            ", ".join(sorted(route.methods)) or "ANY",
            route.host or "*",
            route.path,
        )
        for route in router.routes
    ]
    if not rows:
        print("No routes registered.")
        return

    headers = ("NAME", "METHODS", "HOST", "PATH")
    widths = [max(len(headers[i]), *(len(row[i]) for row in rows)) for i in range(3)]
    fmt = f"{{:<{widths[0]}}}  {{:<{widths[1]}}}  {{:<{widths[2]}}}  {{}}"
    print(fmt.format(*headers))
    sep_len = sum(widths) + 6 + max(len(row[3]) for row in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
