"""Compare expected routes against the routes reported by the mesh."""

import logging
from typing import Optional, Sequence

from src.routes.models import CardinalityMismatch, RouteMatch, RouteRecord, RouteVerdict

logger = logging.getLogger(__name__)


def find_route(expected: RouteRecord, observed: Sequence[RouteRecord]) -> Optional[RouteRecord]:
    """Return the first observed route that starts with ``expected``.

    Matching is by prefix so expectations can omit the metric columns the
    routes command appends after the route name.
    """
    for route in observed:
        if route.startswith(expected):
            return route
    return None


def verify_routes(
    expected: Sequence[RouteRecord],
    observed: Sequence[RouteRecord],
    checkpoint: str = "",
) -> RouteVerdict:
    """Verify that every expected route is present and the counts agree.

    All findings are collected: a count mismatch does not stop the per-route
    checks, and a missing route does not stop the remaining ones. Several
    expected routes may be satisfied by the same observed route.

    Args:
        expected: Expected route prefixes.
        observed: Routes parsed from the routes command.
        checkpoint: Label used in logs and reports.

    Returns:
        RouteVerdict with every finding.
    """
    expected = list(expected)
    observed = list(observed)

    cardinality = None
    if len(expected) != len(observed):
        cardinality = CardinalityMismatch(
            expected_count=len(expected), observed_count=len(observed)
        )

    matches = [
        RouteMatch(expected=route, matched_by=find_route(route, observed)) for route in expected
    ]

    verdict = RouteVerdict(
        checkpoint=checkpoint,
        expected=expected,
        observed=observed,
        matches=matches,
        cardinality=cardinality,
    )

    if verdict.passed:
        logger.info(f"Checkpoint {checkpoint or 'routes'} passed ({len(expected)} routes)")
    else:
        for message in verdict.findings:
            logger.warning(f"Checkpoint {checkpoint or 'routes'}: {message}")

    return verdict
