"""Route fetching and route-set verification."""

from src.routes.fetcher import ROUTE_HEADER_TOKEN, RouteFetcher, parse_route_details
from src.routes.models import (
    DEFAULT_ROUTE,
    CardinalityMismatch,
    MissingRouteFinding,
    RouteMatch,
    RouteRecord,
    RouteVerdict,
)
from src.routes.verifier import find_route, verify_routes

__all__ = [
    # Models
    "RouteRecord",
    "DEFAULT_ROUTE",
    "RouteMatch",
    "CardinalityMismatch",
    "MissingRouteFinding",
    "RouteVerdict",
    # Fetching
    "ROUTE_HEADER_TOKEN",
    "RouteFetcher",
    "parse_route_details",
    # Verification
    "find_route",
    "verify_routes",
]
