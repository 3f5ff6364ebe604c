"""``waypoint match`` — resolve a path the way the router would at runtime."""

import argparse
import sys

from waypoint.cli._resolve import load_router
from waypoint.errors import HTTPError


def run_match(args: argparse.Namespace) -> None:
    """Print the matched route name and its parameters.

    Exits 1 with the router's error on 404 or 405.
    """
    router = load_router(args)
    try:
        match = router.match_route(args.path, args.method)
    except HTTPError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(match.route.name)
    for key, value in match.path_params.items():
        print(f"  {key} = {value}")
