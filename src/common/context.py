"""Explicit execution context for CLI and cluster access.

An ``ExecutionContext`` carries everything a verification run needs to talk to
the outside world: the CLI locations, the control plane namespace, the command
runner and the Kubernetes helper. It is built once per test session and passed
to the route fetcher, the scenario driver and the setup helpers.
"""

import logging
import subprocess
from typing import List, Optional

from src.common.cluster import KubernetesHelper
from src.common.commands import CommandResult, CommandRunner, run_command
from src.common.settings import Settings

logger = logging.getLogger(__name__)


class ExecutionContext:
    """CLI and cluster access for one verification session."""

    def __init__(
        self,
        settings: Settings,
        runner: CommandRunner = subprocess.run,
        cluster: Optional[KubernetesHelper] = None,
    ):
        self.settings = settings
        self.runner = runner
        self._cluster = cluster

    @property
    def cluster(self) -> KubernetesHelper:
        """Kubernetes helper, built from the kubeconfig settings on first use."""
        if self._cluster is None:
            self._cluster = KubernetesHelper.from_kubeconfig(
                kubeconfig=self.settings.kubeconfig,
                context=self.settings.kube_context,
                timeout=self.settings.readiness_timeout,
                poll_interval=self.settings.poll_interval,
            )
        return self._cluster

    def get_test_namespace(self, test_name: str) -> str:
        """Namespace for a test, scoped under the control plane namespace."""
        return f"{self.settings.linkerd_namespace}-{test_name}"

    def linkerd_run(self, *args: str) -> CommandResult:
        """Run the linkerd CLI against the configured control plane.

        Raises:
            CommandError: If the command fails.
        """
        command = [
            self.settings.linkerd_path,
            "--linkerd-namespace",
            self.settings.linkerd_namespace,
            *args,
        ]
        return self._run(command)

    def kubectl(self, *args: str, stdin: Optional[str] = None) -> CommandResult:
        """Run kubectl with the configured kubeconfig and context.

        Raises:
            CommandError: If the command fails.
        """
        command: List[str] = [self.settings.kubectl_path]
        if self.settings.kubeconfig:
            command.extend(["--kubeconfig", str(self.settings.kubeconfig)])
        if self.settings.kube_context:
            command.extend(["--context", self.settings.kube_context])
        command.extend(args)
        return self._run(command, stdin=stdin)

    def kubectl_apply(self, manifest: str, namespace: str) -> CommandResult:
        """Apply a manifest read from stdin into a namespace."""
        logger.info(f"Applying manifest to namespace {namespace}")
        return self.kubectl("apply", "-f", "-", "--namespace", namespace, stdin=manifest)

    def _run(self, command: List[str], stdin: Optional[str] = None) -> CommandResult:
        return run_command(
            command,
            stdin=stdin,
            runner=self.runner,
            timeout=self.settings.command_timeout,
        )
