"""Scenario declarations loaded from YAML files."""

import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml
from pydantic import ValidationError

from src.common.errors import ScenarioDefinitionError
from src.scenarios.models import TestScenario

logger = logging.getLogger(__name__)


def _scenario_from_entry(entry: Dict[str, Any], namespace: str, base_dir: Path) -> TestScenario:
    data: Dict[str, Any] = {
        "source": entry.get("source"),
        "deploy_name": entry.get("deploy"),
        "sp_name": entry.get("profile"),
        "namespace": entry.get("namespace") or namespace,
        "expected_routes": entry.get("expected_routes"),
    }
    for key in ("tap_route_limit", "tap_duration"):
        if key in entry:
            data[key] = entry[key]

    schema = entry.get("schema")
    if schema:
        schema_path = Path(schema)
        data["schema_file"] = schema_path if schema_path.is_absolute() else base_dir / schema_path

    return TestScenario(**data)


def load_scenarios(path: Path, namespace: str) -> List[TestScenario]:
    """Load scenarios from a YAML declaration file.

    Args:
        path: YAML file with a top-level ``scenarios`` list.
        namespace: Namespace for entries that do not name one.

    Returns:
        Scenarios in file order.

    Raises:
        ScenarioDefinitionError: If the file is unreadable or an entry is invalid.
    """
    path = Path(path)
    try:
        with open(path) as f:
            document = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ScenarioDefinitionError(f"Cannot read scenarios from {path}: {e}") from e

    if not isinstance(document, dict) or not isinstance(document.get("scenarios"), list):
        raise ScenarioDefinitionError(f"{path} must contain a 'scenarios' list")

    scenarios = []
    for index, entry in enumerate(document["scenarios"]):
        if not isinstance(entry, dict):
            raise ScenarioDefinitionError(f"{path}: scenario #{index} is not a mapping")
        try:
            scenarios.append(_scenario_from_entry(entry, namespace, path.parent))
        except ValidationError as e:
            raise ScenarioDefinitionError(f"{path}: scenario #{index} is invalid: {e}") from e

    logger.info(f"Loaded {len(scenarios)} scenarios from {path}")
    return scenarios
