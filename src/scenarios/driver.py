"""Run a service profile scenario end to end."""

import logging
from typing import List, Optional, Sequence

from src.common.context import ExecutionContext
from src.common.errors import CommandError, ProfileSubmissionError
from src.routes.fetcher import RouteFetcher
from src.routes.models import DEFAULT_ROUTE, RouteRecord, RouteVerdict
from src.routes.verifier import verify_routes
from src.scenarios.models import ScenarioResult, TestScenario

logger = logging.getLogger(__name__)

# Before any profile exists only the catch-all route is reported
INITIAL_EXPECTED_ROUTES = (DEFAULT_ROUTE,)

INITIAL_CHECKPOINT = "initial"
PROFILE_CHECKPOINT = "profile-applied"


class ScenarioDriver:
    """Drives the baseline check, profile submission and final check.

    Fetch and submission failures propagate and end the scenario. Verification
    findings never do: both checkpoint verdicts are returned for the caller to
    judge.
    """

    def __init__(self, context: ExecutionContext, fetcher: Optional[RouteFetcher] = None):
        self.context = context
        self.fetcher = fetcher or RouteFetcher(context)

    def profile_command(self, scenario: TestScenario) -> List[str]:
        """Arguments for `linkerd profile` for a scenario."""
        return [
            "profile",
            "--namespace",
            scenario.namespace,
            scenario.sp_name,
            scenario.source.flag,
            *scenario.source_args(),
        ]

    def generate_profile(self, scenario: TestScenario) -> str:
        """Generate the service profile manifest for a scenario.

        Raises:
            ProfileSubmissionError: If the profile command fails.
        """
        command = self.profile_command(scenario)
        try:
            result = self.context.linkerd_run(*command)
        except CommandError as e:
            raise ProfileSubmissionError(f"'linkerd {' '.join(command)}' failed: {e}") from e
        return result.stdout

    def submit_profile(self, manifest: str, namespace: str) -> None:
        """Apply a service profile manifest to the cluster.

        Raises:
            ProfileSubmissionError: If kubectl apply fails.
        """
        try:
            self.context.kubectl_apply(manifest, namespace)
        except CommandError as e:
            raise ProfileSubmissionError(f"kubectl apply command failed: {e}") from e

    def checkpoint(
        self, scenario: TestScenario, expected: Sequence[RouteRecord], label: str
    ) -> RouteVerdict:
        """Fetch the live routes once and verify them against ``expected``."""
        observed = self.fetcher.fetch(scenario.deploy_name, scenario.namespace)
        return verify_routes(expected, observed, checkpoint=label)

    def run(self, scenario: TestScenario) -> ScenarioResult:
        """Run a scenario and return the verdict of each checkpoint.

        Raises:
            FetchError: If a route listing fails.
            ProfileSubmissionError: If the profile cannot be generated or applied.
        """
        logger.info(
            f"Running scenario {scenario.name} for {scenario.deploy_name} "
            f"in {scenario.namespace}"
        )
        verdicts = [self.checkpoint(scenario, INITIAL_EXPECTED_ROUTES, INITIAL_CHECKPOINT)]

        manifest = self.generate_profile(scenario)
        self.submit_profile(manifest, scenario.namespace)
        # No wait between apply and the second fetch; slow route propagation
        # shows up as a failed checkpoint.
        logger.info(f"Applied service profile {scenario.sp_name}")

        verdicts.append(self.checkpoint(scenario, scenario.expected_routes, PROFILE_CHECKPOINT))

        result = ScenarioResult(scenario=scenario, checkpoints=verdicts)
        if not result.passed:
            logger.warning(f"Scenario {scenario.name} failed:\n{result.report()}")
        return result
