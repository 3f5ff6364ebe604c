"""Waypoint CLI — inspect route tables, match paths, generate URLs.

Entry point registered as ``waypoint`` in ``pyproject.toml``::

    [project.scripts]
    waypoint = "waypoint.cli:main"
"""

import argparse
import logging
import sys


def _add_app_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "app",
        help="Import string of a Router or RouteCollection (e.g. myapp.routes:router)",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``waypoint`` command."""
    parser = argparse.ArgumentParser(
        prog="waypoint",
        description="Waypoint — ordered route matching and URL generation.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log routing decisions")
    subparsers = parser.add_subparsers(dest="command")

    # -- waypoint routes --------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List routes in match order")
    _add_app_argument(routes_parser)

    # -- waypoint match ---------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Match a path against the routes")
    _add_app_argument(match_parser)
    match_parser.add_argument("path", help="Request path (e.g. /orders/77)")
    match_parser.add_argument("--method", default="GET", help="HTTP method (default: GET)")
    match_parser.add_argument("--host", default=None, help="Request host for host-bound routes")

    # -- waypoint url -----------------------------------------------------
    url_parser = subparsers.add_parser("url", help="Generate the URL for a named route")
    _add_app_argument(url_parser)
    url_parser.add_argument("name", help="Route name (e.g. orders.show)")
    url_parser.add_argument("params", nargs="*", help="Parameters as key=value")
    url_parser.add_argument(
        "--absolute",
        action="store_true",
        help="Prefix scheme and host",
    )
    url_parser.add_argument(
        "--base-url",
        default=None,
        help="Scheme and host for absolute URLs (e.g. https://shop.test)",
    )

    # -- waypoint check ---------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Report templates that can never match")
    _add_app_argument(check_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "routes":
        from waypoint.cli._routes import run_routes

        run_routes(args)
    elif args.command == "match":
        from waypoint.cli._match import run_match

        run_match(args)
    elif args.command == "url":
        from waypoint.cli._url import run_url

        run_url(args)
    elif args.command == "check":
        from waypoint.cli._check import run_check

        run_check(args)
