"""Test application deployment."""

from unittest.mock import MagicMock

import pytest

from src.common.errors import CommandError, ProfileSubmissionError, ReadinessError
from src.scenarios.driver import ScenarioDriver
from src.scenarios.loader import load_scenarios
from src.scenarios.setup import (
    TEST_APPLICATION_DEPLOYMENTS,
    deploy_application,
    provisioned_namespace,
)
from tests.fakes import route_row, routes_table

NAMESPACE = "linkerd-serviceprofile-test"
INJECTED = "kind: Deployment\nmetadata:\n  annotations:\n    linkerd.io/inject: enabled\n"


@pytest.mark.unit
class TestDeployApplication:
    """deploy_application"""

    def test_injects_applies_and_checks_every_deployment(
        self, mock_context, fake_cli, project_paths
    ):
        fake_cli.add("inject", INJECTED)

        failures = deploy_application(mock_context, project_paths.tap_application, NAMESPACE)

        assert failures == []
        assert fake_cli.calls_for("inject")[0]["args"][-1] == str(project_paths.tap_application)
        assert fake_cli.calls_for("apply")[0]["input"] == INJECTED
        checked = [
            call.args[0]
            for call in mock_context.cluster.apps.read_namespaced_deployment.call_args_list
        ]
        assert sorted(set(checked)) == sorted(TEST_APPLICATION_DEPLOYMENTS)

    def test_readiness_failures_are_collected(self, mock_context, fake_cli, project_paths):
        cluster = MagicMock()
        cluster.check_pods.side_effect = ReadinessError("Pod [t2-x] in namespace [ns] is not running")
        cluster.check_deployment.side_effect = [None, ReadinessError("not ready"), None, None]
        mock_context._cluster = cluster

        failures = deploy_application(mock_context, project_paths.tap_application, NAMESPACE)

        assert len(failures) == 5
        assert "Error validating deployment [t2]:\nnot ready" in failures
        cluster.create_namespace.assert_called_once_with(NAMESPACE)

    def test_inject_failure_raises(self, mock_context, fake_cli, project_paths):
        fake_cli.add("inject", returncode=1, stderr="Error: failed to read manifest")

        with pytest.raises(CommandError):
            deploy_application(mock_context, project_paths.tap_application, NAMESPACE)

        assert fake_cli.calls_for("apply") == []


@pytest.mark.unit
class TestProvisionedNamespace:
    """provisioned_namespace"""

    def test_namespace_deleted_on_exit(self, mock_context):
        core = mock_context.cluster.core

        with provisioned_namespace(mock_context, NAMESPACE) as namespace:
            assert namespace == NAMESPACE
            assert core.create_namespace.call_count == 1
            core.delete_namespace.assert_not_called()

        core.delete_namespace.assert_called_once()
        assert core.delete_namespace.call_args.args[0] == NAMESPACE

    def test_namespace_deleted_when_body_fails(self, mock_context):
        core = mock_context.cluster.core

        with pytest.raises(ProfileSubmissionError):
            with provisioned_namespace(mock_context, NAMESPACE):
                raise ProfileSubmissionError("kubectl apply command failed")

        core.delete_namespace.assert_called_once()

    def test_tap_scenario_leaves_no_namespace(self, mock_context, fake_cli, project_paths):
        core = mock_context.cluster.core
        tap = load_scenarios(project_paths.scenario_file, NAMESPACE)[0]
        fake_cli.add("inject", INJECTED)
        fake_cli.add("routes", routes_table(route_row("[DEFAULT]")))
        fake_cli.add("routes", routes_table(*[route_row(route) for route in tap.expected_routes]))
        fake_cli.add("profile", "kind: ServiceProfile\n")

        with provisioned_namespace(mock_context, NAMESPACE) as namespace:
            assert deploy_application(mock_context, project_paths.tap_application, namespace) == []
            result = ScenarioDriver(mock_context).run(tap)

        assert result.passed
        assert core.delete_namespace.call_count == 1
