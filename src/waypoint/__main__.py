"""Allow ``python -m waypoint``."""

from waypoint.cli import main

main()
