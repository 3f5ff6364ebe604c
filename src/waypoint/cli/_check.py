"""``waypoint check`` — report route templates that can never match.

The router skips such routes silently at match time; this command makes
them visible. Exits with code 1 if any are found.
"""

import argparse

from waypoint.cli._resolve import load_router


def run_check(args: argparse.Namespace) -> None:
    """Compile every template and list the failures."""
    router = load_router(args)
    invalid = router.check_patterns()
    if not invalid:
        print(f"All {len(router.routes)} route templates compile.")
        return

    for route, exc in invalid:
        print(f"{route.name}: {exc.reason} in {exc.template!r}")
    print(f"\n{len(invalid)} of {len(router.routes)} routes can never match.")
    raise SystemExit(1)
