"""Pytest configuration and shared fixtures for service profile route tests."""

import os
from pathlib import Path
from typing import Tuple
from unittest.mock import MagicMock

import pytest

from src.common.cluster import KubernetesHelper
from src.common.context import ExecutionContext
from src.common.paths import paths
from src.common.settings import Settings
from tests.fakes import FakeCommandRunner


def pytest_addoption(parser: pytest.Parser) -> None:
    """Add custom command-line options."""
    parser.addoption(
        "--live-cluster",
        action="store_true",
        default=False,
        help="Run against a real cluster and linkerd CLI instead of mocks",
    )
    parser.addoption(
        "--kubeconfig",
        action="store",
        default=os.getenv("KUBECONFIG"),
        help="Path to kubeconfig file",
    )
    parser.addoption(
        "--linkerd",
        action="store",
        default="linkerd",
        help="Path to the linkerd CLI binary",
    )
    parser.addoption(
        "--linkerd-namespace",
        action="store",
        default="linkerd",
        help="Namespace of the Linkerd control plane",
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Pure logic tests, no external processes")
    config.addinivalue_line("markers", "serviceprofiles: Service profile route scenarios")
    config.addinivalue_line("markers", "slow: Marks tests as slow (deselect with '-m \"not slow\"')")
    config.addinivalue_line(
        "markers", "integration: Integration tests requiring full infrastructure"
    )


def _create_mock_k8s_apis() -> Tuple[MagicMock, MagicMock]:
    """Create mock Kubernetes APIs where every deployment has one ready pod."""
    mock_core = MagicMock()
    mock_apps = MagicMock()

    def read_deployment(name, namespace):
        deployment = MagicMock()
        deployment.metadata.name = name
        deployment.spec.selector.match_labels = {"app": name}
        deployment.status.ready_replicas = 1
        return deployment

    def list_pods(namespace=None, label_selector="", **kwargs):
        app = label_selector.split("=", 1)[-1]
        container = MagicMock(ready=True)
        container.name = app
        pod = MagicMock()
        pod.metadata.name = f"{app}-7d4b9c8f6-x2k9p"
        pod.metadata.namespace = namespace
        pod.status.phase = "Running"
        pod.status.container_statuses = [container]
        pod_list = MagicMock()
        pod_list.items = [pod]
        return pod_list

    mock_apps.read_namespaced_deployment.side_effect = read_deployment
    mock_core.list_namespaced_pod.side_effect = list_pods
    return mock_core, mock_apps


@pytest.fixture(scope="session")
def use_mocks(request: pytest.FixtureRequest) -> bool:
    """Mocks are used unless --live-cluster is given."""
    return not request.config.getoption("--live-cluster")


@pytest.fixture(scope="session")
def settings(request: pytest.FixtureRequest) -> Settings:
    """Settings built from command-line options."""
    kubeconfig = request.config.getoption("--kubeconfig")
    return Settings(
        linkerd_path=request.config.getoption("--linkerd"),
        linkerd_namespace=request.config.getoption("--linkerd-namespace"),
        kubeconfig=Path(kubeconfig).expanduser() if kubeconfig else None,
    )


@pytest.fixture
def fake_cli() -> FakeCommandRunner:
    """Scripted replacement for the linkerd and kubectl CLIs."""
    return FakeCommandRunner()


@pytest.fixture
def mock_cluster() -> KubernetesHelper:
    """Kubernetes helper backed by mock APIs with instant polling."""
    core, apps = _create_mock_k8s_apis()
    return KubernetesHelper(core, apps, timeout=1, poll_interval=0.1, sleep=lambda seconds: None)


@pytest.fixture
def mock_context(
    settings: Settings, fake_cli: FakeCommandRunner, mock_cluster: KubernetesHelper
) -> ExecutionContext:
    """Execution context wired to the fake CLI and mock cluster."""
    return ExecutionContext(settings, runner=fake_cli, cluster=mock_cluster)


@pytest.fixture
def execution_context(
    use_mocks: bool,
    settings: Settings,
    fake_cli: FakeCommandRunner,
    mock_cluster: KubernetesHelper,
) -> ExecutionContext:
    """Execution context for a test - uses mocks by default."""
    if use_mocks:
        return ExecutionContext(settings, runner=fake_cli, cluster=mock_cluster)
    return ExecutionContext(settings)


@pytest.fixture(scope="session")
def project_paths():
    """Project paths; fails fast when test data is missing."""
    missing = paths.validate()
    assert not missing, f"Missing project paths: {missing}"
    return paths
