"""Runtime settings for route verification runs."""

from pathlib import Path
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings loaded from environment variables.

    Build one per run and hand it to ``ExecutionContext``.
    """

    # CLI binaries
    linkerd_path: str = Field(
        default="linkerd",
        description="Path to the linkerd CLI binary",
    )

    kubectl_path: str = Field(
        default="kubectl",
        description="Path to the kubectl binary",
    )

    # Cluster access
    linkerd_namespace: str = Field(
        default="linkerd",
        description="Namespace of the Linkerd control plane; also the test namespace prefix",
        pattern="^[a-z0-9-]+$",
    )

    kubeconfig: Optional[Path] = Field(
        default=None,
        description="Path to kubeconfig file (defaults to the client library lookup)",
    )

    kube_context: Optional[str] = Field(
        default=None,
        description="Kubeconfig context to use",
    )

    # Timing
    command_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Seconds before a CLI invocation is killed (None waits forever)",
    )

    readiness_timeout: float = Field(
        default=180,
        gt=0,
        description="Seconds to wait for pods and deployments to become ready",
    )

    poll_interval: float = Field(
        default=2.0,
        gt=0,
        description="Seconds between readiness polls",
    )

    @field_validator("kubeconfig", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Optional[Path]:
        """Expand ~ in paths."""
        if isinstance(v, str):
            return Path(v).expanduser()
        return v

    class Config:
        """Pydantic settings configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
