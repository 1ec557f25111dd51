"""Fetch the live route table of a meshed workload."""

import logging
from typing import List

from src.common.context import ExecutionContext
from src.common.errors import CommandError, FetchError
from src.routes.models import RouteRecord

logger = logging.getLogger(__name__)

# Leading token of the header line in `linkerd routes` output
ROUTE_HEADER_TOKEN = "ROUTE"


def parse_route_details(cli_output: str) -> List[RouteRecord]:
    """Parse `linkerd routes` output into route records.

    Each line is trimmed; blank lines and header lines are dropped. The full
    trimmed line is kept as the record (no column splitting), in tool order.
    """
    routes = []
    for line in cli_output.split("\n"):
        line = line.strip()
        if line and not line.startswith(ROUTE_HEADER_TOKEN):
            routes.append(line)
    return routes


class RouteFetcher:
    """Lists the routes the mesh currently reports for a workload."""

    def __init__(self, context: ExecutionContext):
        self.context = context

    def fetch(self, workload: str, namespace: str) -> List[RouteRecord]:
        """Run `linkerd routes` for a workload and parse the result.

        Args:
            workload: Workload reference, e.g. ``deploy/t1``.
            namespace: Namespace of the workload.

        Returns:
            Observed routes in tool output order; empty output gives an empty list.

        Raises:
            ValueError: If workload or namespace is empty or blank.
            FetchError: If the routes command fails.
        """
        if not workload or not workload.strip():
            raise ValueError("workload must be non-empty")
        if not namespace or not namespace.strip():
            raise ValueError("namespace must be non-empty")

        try:
            result = self.context.linkerd_run("routes", "--namespace", namespace, workload)
        except CommandError as e:
            raise FetchError(workload, namespace, str(e)) from e

        routes = parse_route_details(result.stdout)
        logger.info(f"Fetched {len(routes)} routes for {workload} in {namespace}")
        return routes
