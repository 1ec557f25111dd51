"""Service profile scenarios: declarations, setup and the scenario driver."""

from src.scenarios.driver import (
    INITIAL_CHECKPOINT,
    INITIAL_EXPECTED_ROUTES,
    PROFILE_CHECKPOINT,
    ScenarioDriver,
)
from src.scenarios.loader import load_scenarios
from src.scenarios.models import DiscoverySource, ScenarioResult, TestScenario
from src.scenarios.setup import (
    TEST_APPLICATION_DEPLOYMENTS,
    deploy_application,
    provisioned_namespace,
)

__all__ = [
    "DiscoverySource",
    "TestScenario",
    "ScenarioResult",
    "ScenarioDriver",
    "INITIAL_CHECKPOINT",
    "INITIAL_EXPECTED_ROUTES",
    "PROFILE_CHECKPOINT",
    "load_scenarios",
    "provisioned_namespace",
    "deploy_application",
    "TEST_APPLICATION_DEPLOYMENTS",
]
