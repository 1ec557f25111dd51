"""Kubernetes readiness checks and test namespace provisioning."""

import logging
import time
from pathlib import Path
from typing import Any, Callable, Optional

from kubernetes import client, config as k8s_config
from kubernetes.client import V1Namespace, V1ObjectMeta
from kubernetes.client.rest import ApiException

from src.common.errors import ReadinessError

logger = logging.getLogger(__name__)


class KubernetesHelper:
    """Thin wrapper over the Kubernetes API used to prepare test workloads.

    Readiness checks poll until the expected state is reached or ``timeout``
    elapses, in which case the last observed problem is raised as a
    ``ReadinessError``.
    """

    def __init__(
        self,
        core_api: Any,
        apps_api: Any,
        timeout: float = 180,
        poll_interval: float = 2.0,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.core = core_api
        self.apps = apps_api
        self.timeout = timeout
        self.poll_interval = poll_interval
        self._sleep = sleep
        self._clock = clock

    @classmethod
    def from_kubeconfig(
        cls,
        kubeconfig: Optional[Path] = None,
        context: Optional[str] = None,
        **kwargs: Any,
    ) -> "KubernetesHelper":
        """Build a helper from a kubeconfig file."""
        k8s_config.load_kube_config(
            config_file=str(kubeconfig) if kubeconfig else None,
            context=context,
        )
        return cls(client.CoreV1Api(), client.AppsV1Api(), **kwargs)

    def create_namespace(self, name: str) -> None:
        """Create a namespace, accepting one that already exists."""
        namespace = V1Namespace(metadata=V1ObjectMeta(name=name))
        try:
            self.core.create_namespace(namespace)
            logger.info(f"Created namespace {name}")
        except ApiException as e:
            if e.status != 409:  # Already exists
                raise

    def delete_namespace(self, name: str) -> None:
        """Delete a namespace; cleanup failures are logged, not raised."""
        try:
            self.core.delete_namespace(name)
        except ApiException as e:
            if e.status != 404:  # Ignore if namespace doesn't exist
                logger.warning(f"Failed to cleanup test namespace {name}: {e}")
        except Exception as e:
            logger.error(f"Unexpected error during namespace cleanup: {e}", exc_info=True)

    def check_pods(self, namespace: str, deployment_name: str, replicas: int) -> None:
        """Wait until a deployment's pods are running with all containers ready.

        Raises:
            ReadinessError: If the pods are not ready before the timeout.
        """

        def _check() -> None:
            pods = self._pods_for_deployment(namespace, deployment_name)

            for pod in pods:
                if pod.status.phase != "Running":
                    raise ReadinessError(
                        f"Pod [{pod.metadata.name}] in namespace [{namespace}] is not running"
                    )
                for container in pod.status.container_statuses or []:
                    if not container.ready:
                        raise ReadinessError(
                            f"Container [{container.name}] in pod [{pod.metadata.name}] "
                            f"in namespace [{namespace}] is not ready"
                        )

            if len(pods) != replicas:
                raise ReadinessError(
                    f"Expected there to be [{replicas}] pods in deployment [{deployment_name}] "
                    f"in namespace [{namespace}], but found [{len(pods)}]"
                )

        self._retry_for(_check)

    def check_deployment(self, namespace: str, deployment_name: str, replicas: int) -> None:
        """Wait until a deployment reports the expected number of ready replicas.

        Raises:
            ReadinessError: If the deployment is not ready before the timeout.
        """

        def _check() -> None:
            deployment = self.apps.read_namespaced_deployment(deployment_name, namespace)
            ready = deployment.status.ready_replicas or 0
            if ready != replicas:
                raise ReadinessError(
                    f"Expected deployment [{deployment_name}] in namespace [{namespace}] "
                    f"to have [{replicas}] ready replicas, but found [{ready}]"
                )

        self._retry_for(_check)

    def _pods_for_deployment(self, namespace: str, deployment_name: str) -> list:
        deployment = self.apps.read_namespaced_deployment(deployment_name, namespace)
        match_labels = deployment.spec.selector.match_labels or {}
        selector = ",".join(f"{key}={value}" for key, value in sorted(match_labels.items()))
        pods = self.core.list_namespaced_pod(namespace=namespace, label_selector=selector)
        return list(pods.items)

    def _retry_for(self, check: Callable[[], None]) -> None:
        deadline = self._clock() + self.timeout

        while True:
            try:
                check()
                return
            except (ReadinessError, ApiException) as e:
                if self._clock() >= deadline:
                    raise ReadinessError(f"Timed out after {self.timeout}s: {e}") from e
                logger.debug(f"Not ready yet: {e}")
            self._sleep(self.poll_interval)
