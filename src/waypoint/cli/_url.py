"""``waypoint url`` — generate a URL for a named route."""

import argparse
import sys
from typing import Any

from waypoint.cli._resolve import load_router
from waypoint.errors import HTTPError


def parse_params(pairs: list[str]) -> dict[str, Any]:
    """Turn ``key=value`` arguments into a parameter mapping.

    A key given more than once collects its values into a list, which the
    generator always sends to the query string.
    """
    params: dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            msg = f"Expected key=value, got {pair!r}"
            raise ValueError(msg)
        if key in params:
            existing = params[key]
            params[key] = [*existing, value] if isinstance(existing, list) else [existing, value]
        else:
            params[key] = value
    return params


def run_url(args: argparse.Namespace) -> None:
    """Print the generated URL, or exit 1 on a bad parameter or unknown route."""
    router = load_router(args)
    try:
        params = parse_params(args.params)
        url = router.generate_route(args.name, params, absolute=args.absolute)
    except (ValueError, HTTPError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    print(url)
