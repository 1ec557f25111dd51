"""Pydantic models for route verification results."""

from typing import List, Optional

from pydantic import BaseModel, Field, computed_field
from tabulate import tabulate

# A route as printed by `linkerd routes`: the full trimmed table line
RouteRecord = str

DEFAULT_ROUTE: RouteRecord = "[DEFAULT]"


class RouteMatch(BaseModel):
    """Outcome of looking up one expected route in the observed set."""

    expected: RouteRecord = Field(description="Expected route prefix")
    matched_by: Optional[RouteRecord] = Field(
        default=None, description="First observed route starting with the expected prefix"
    )

    @computed_field
    @property
    def found(self) -> bool:
        """Whether any observed route matched."""
        return self.matched_by is not None

    class Config:
        """Pydantic configuration."""

        frozen = True


class CardinalityMismatch(BaseModel):
    """Expected and observed route sets have different sizes."""

    expected_count: int = Field(ge=0, description="Number of expected routes")
    observed_count: int = Field(ge=0, description="Number of observed routes")

    @computed_field
    @property
    def delta(self) -> int:
        """Observed minus expected; positive means extra routes."""
        return self.observed_count - self.expected_count

    @property
    def message(self) -> str:
        return (
            f"mismatch routes count. Expected {self.expected_count}, "
            f"Actual {self.observed_count}"
        )

    class Config:
        """Pydantic configuration."""

        frozen = True


class MissingRouteFinding(BaseModel):
    """An expected route with no prefix match among the observed routes."""

    route: RouteRecord = Field(description="Expected route that was not found")
    observed: List[RouteRecord] = Field(
        default_factory=list, description="Observed routes that were searched"
    )

    @property
    def message(self) -> str:
        return f"Expected route {self.route} not found in {self.observed}"

    class Config:
        """Pydantic configuration."""

        frozen = True


class RouteVerdict(BaseModel):
    """Result of comparing an expected route set against an observed one.

    Carries everything needed to render a failure report without running the
    comparison again.
    """

    checkpoint: str = Field(default="", description="Label of the checkpoint being verified")
    expected: List[RouteRecord] = Field(default_factory=list, description="Expected routes")
    observed: List[RouteRecord] = Field(default_factory=list, description="Observed routes")
    matches: List[RouteMatch] = Field(
        default_factory=list, description="Lookup outcome per expected route, in order"
    )
    cardinality: Optional[CardinalityMismatch] = Field(
        default=None, description="Set when the route counts differ"
    )

    @computed_field
    @property
    def missing(self) -> List[RouteRecord]:
        """Expected routes with no prefix match, in declaration order."""
        return [match.expected for match in self.matches if not match.found]

    @computed_field
    @property
    def count_delta(self) -> int:
        """Observed minus expected route count."""
        return len(self.observed) - len(self.expected)

    @computed_field
    @property
    def passed(self) -> bool:
        """True when there is no count mismatch and nothing is missing."""
        return self.cardinality is None and not self.missing

    @property
    def missing_findings(self) -> List[MissingRouteFinding]:
        return [
            MissingRouteFinding(route=route, observed=list(self.observed))
            for route in self.missing
        ]

    @property
    def findings(self) -> List[str]:
        """Human-readable findings: count mismatch first, then missing routes."""
        messages = []
        if self.cardinality is not None:
            messages.append(self.cardinality.message)
        messages.extend(finding.message for finding in self.missing_findings)
        return messages

    def report(self) -> str:
        """Render the verdict as a text report."""
        label = self.checkpoint or "routes"
        status = "PASS" if self.passed else "FAIL"

        rows = [
            [match.expected, "found" if match.found else "MISSING", match.matched_by or "-"]
            for match in self.matches
        ]
        lines = [f"Checkpoint {label}: {status}"]
        if rows:
            lines.append(
                tabulate(rows, headers=["Expected route", "Status", "Matched by"], tablefmt="grid")
            )
        lines.append(f"Observed routes ({len(self.observed)}):")
        lines.extend(f"  {route}" for route in self.observed)
        lines.extend(f"- {message}" for message in self.findings)
        return "\n".join(lines)

    class Config:
        """Pydantic configuration."""

        frozen = True
