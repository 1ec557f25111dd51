"""Centralized path configuration for the project.

Single source of truth for repository paths shared by scenario loading,
application setup and the test suite.
"""

from pathlib import Path


class ProjectPaths:
    """Project directory structure paths."""

    def __init__(self, base_path: Path | None = None):
        """Initialize project paths.

        Args:
            base_path: Optional base path for the project root.
                      If None, auto-detects from this file's location.
        """
        if base_path is None:
            # Auto-detect: go up from src/common/paths.py to repository root
            self.root = Path(__file__).parent.parent.parent
        else:
            self.root = base_path

        # Source directories
        self.src = self.root / "src"
        self.tests = self.root / "tests"

        # Test data consumed by the service profile scenarios
        self.testdata = self.root / "testdata"
        self.tap_application = self.testdata / "tap_application.yaml"
        self.t3_swagger = self.testdata / "t3.swagger"
        self.scenario_file = self.testdata / "serviceprofiles.yaml"

    def validate(self) -> list[str]:
        """Validate that critical paths exist.

        Returns:
            List of missing critical paths (empty if all exist).
        """
        critical_paths = [
            ("Test data directory", self.testdata),
            ("Tap application manifest", self.tap_application),
            ("OpenAPI schema", self.t3_swagger),
            ("Scenario declarations", self.scenario_file),
        ]

        missing = []
        for name, path in critical_paths:
            if not path.exists():
                missing.append(f"{name}: {path}")

        return missing


# Global singleton instance
paths = ProjectPaths()
