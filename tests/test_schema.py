from __future__ import annotations

import json
from pathlib import Path

import pydantic
import pytest

from scanbridge.exceptions import ConfigurationError
from scanbridge.schema import ProjectSnapshot, load_snapshot


def test_load_snapshot_round_trips_the_model(
    write_snapshot, scenario_snapshot_payload: dict[str, object]
) -> None:
    snapshot = load_snapshot(write_snapshot(scenario_snapshot_payload))
    top = snapshot.top_level_module()
    assert top.key == "com.example:parent"
    assert top.properties == {}
    assert len(snapshot.skipped_base_dirs) == 1
    assert snapshot.declared_properties["sonar.report.paths"] == "target/report.xml"


def test_snapshot_is_frozen(scenario_snapshot_payload: dict[str, object]) -> None:
    snapshot = ProjectSnapshot.model_validate(scenario_snapshot_payload)
    with pytest.raises(pydantic.ValidationError):
        snapshot.skipped_base_dirs = []  # type: ignore[misc]


def test_load_snapshot_errors_are_configuration_errors(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Cannot read"):
        load_snapshot(tmp_path / "missing.json")
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"modules": [{"key": 1}]}), encoding="utf-8")
    with pytest.raises(ConfigurationError, match="Invalid project snapshot"):
        load_snapshot(bad)
