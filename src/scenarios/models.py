"""Pydantic models for service profile scenarios."""

from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, computed_field, model_validator

from src.routes.models import RouteRecord, RouteVerdict


class DiscoverySource(str, Enum):
    """Sources `linkerd profile` can derive routes from."""

    TAP = "tap"  # Live traffic sampling
    OPEN_API = "open-api"  # Static OpenAPI (Swagger) schema

    @property
    def flag(self) -> str:
        return f"--{self.value}"


class TestScenario(BaseModel):
    """One service profile scenario: where routes come from and what to expect."""

    __test__ = False

    source: DiscoverySource = Field(description="Discovery source for the profile")
    deploy_name: str = Field(min_length=1, description="Target workload, e.g. deploy/t1")
    sp_name: str = Field(min_length=1, description="Service profile (service) name")
    namespace: str = Field(
        min_length=1, pattern="^[a-z0-9-]+$", description="Namespace of the workload"
    )
    expected_routes: Tuple[RouteRecord, ...] = Field(
        description="Routes expected once the profile is applied"
    )
    tap_route_limit: int = Field(default=1, gt=0, description="Max routes taken from tap")
    tap_duration: str = Field(default="25s", description="How long to tap for")
    schema_file: Optional[Path] = Field(default=None, description="OpenAPI schema path")

    @model_validator(mode="after")
    def require_schema_for_open_api(self) -> "TestScenario":
        """The open-api source cannot run without a schema file."""
        if self.source == DiscoverySource.OPEN_API and self.schema_file is None:
            raise ValueError("open-api scenarios require schema_file")
        return self

    @property
    def name(self) -> str:
        return self.source.value

    def source_args(self) -> List[str]:
        """Source-specific arguments appended to `linkerd profile`."""
        if self.source == DiscoverySource.TAP:
            return [
                self.deploy_name,
                "--tap-route-limit",
                str(self.tap_route_limit),
                "--tap-duration",
                self.tap_duration,
            ]
        return [str(self.schema_file)]

    class Config:
        """Pydantic configuration."""

        frozen = True


class ScenarioResult(BaseModel):
    """Verdicts of every checkpoint of a scenario run, in order."""

    scenario: TestScenario = Field(description="Scenario that was run")
    checkpoints: List[RouteVerdict] = Field(
        default_factory=list, description="Checkpoint verdicts in execution order"
    )

    @computed_field
    @property
    def passed(self) -> bool:
        """True when every checkpoint passed."""
        return all(verdict.passed for verdict in self.checkpoints)

    @property
    def findings(self) -> List[str]:
        """Findings of all checkpoints, prefixed with the checkpoint label."""
        return [
            f"[{verdict.checkpoint}] {message}"
            for verdict in self.checkpoints
            for message in verdict.findings
        ]

    def report(self) -> str:
        """Render every checkpoint report for the scenario."""
        header = (
            f"Scenario {self.scenario.name} ({self.scenario.deploy_name} -> "
            f"{self.scenario.sp_name}): {'PASS' if self.passed else 'FAIL'}"
        )
        return "\n\n".join([header] + [verdict.report() for verdict in self.checkpoints])
