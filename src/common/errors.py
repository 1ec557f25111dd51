"""Exception hierarchy for route verification runs.

Verification findings (count mismatches, missing routes) are data carried by
``RouteVerdict`` and are never raised. Only failures that make a scenario step
impossible to complete are exceptions.
"""

from typing import List, Optional, Sequence


class MeshVerificationError(Exception):
    """Base class for all route verification errors."""


class CommandError(MeshVerificationError):
    """An external command could not be run or exited with a non-zero status."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: Optional[int] = None,
        stdout: str = "",
        stderr: str = "",
    ):
        self.command: List[str] = list(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr

        if returncode is None:
            reason = "could not be started"
        else:
            reason = f"failed with exit status {returncode}"
        detail = f": {stderr.strip()}" if stderr.strip() else ""
        super().__init__(f"'{' '.join(self.command)}' command {reason}{detail}")


class FetchError(MeshVerificationError):
    """The route listing for a workload could not be retrieved."""

    def __init__(self, workload: str, namespace: str, reason: str):
        self.workload = workload
        self.namespace = namespace
        super().__init__(f"routes command failed for {workload} in {namespace}: {reason}")


class ProfileSubmissionError(MeshVerificationError):
    """Generating or applying a service profile failed."""


class ReadinessError(MeshVerificationError):
    """Pods or deployments did not reach the expected state in time."""


class ScenarioDefinitionError(MeshVerificationError):
    """A scenario declaration file is malformed."""
