"""Deploy the meshed test application the scenarios run against."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Sequence

from src.common.context import ExecutionContext
from src.common.errors import ReadinessError

logger = logging.getLogger(__name__)

# Deployments in testdata/tap_application.yaml
TEST_APPLICATION_DEPLOYMENTS = ("t1", "t2", "t3", "gateway")


def deploy_application(
    context: ExecutionContext,
    manifest: Path,
    namespace: str,
    deployments: Sequence[str] = TEST_APPLICATION_DEPLOYMENTS,
    replicas: int = 1,
) -> List[str]:
    """Inject, apply and wait for the test application.

    Inject and apply failures raise ``CommandError``. Readiness failures are
    collected and returned so every deployment gets checked.

    Returns:
        Readiness failure messages (empty when everything is ready).
    """
    injected = context.linkerd_run("inject", str(manifest)).stdout

    context.cluster.create_namespace(namespace)
    context.kubectl_apply(injected, namespace)

    failures = []
    for deploy in deployments:
        try:
            context.cluster.check_pods(namespace, deploy, replicas)
        except ReadinessError as e:
            failures.append(str(e))

        try:
            context.cluster.check_deployment(namespace, deploy, replicas)
        except ReadinessError as e:
            failures.append(f"Error validating deployment [{deploy}]:\n{e}")

    if failures:
        logger.warning(f"{len(failures)} readiness checks failed in {namespace}")
    else:
        logger.info(f"Deployments ready in {namespace}: {', '.join(deployments)}")
    return failures


@contextmanager
def provisioned_namespace(context: ExecutionContext, namespace: str) -> Iterator[str]:
    """Create a test namespace and delete it on exit, even after a failure."""
    context.cluster.create_namespace(namespace)
    try:
        yield namespace
    finally:
        logger.info(f"Deleting test namespace {namespace}")
        context.cluster.delete_namespace(namespace)
