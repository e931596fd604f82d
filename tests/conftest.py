from __future__ import annotations

import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
for entry in (ROOT, ROOT / "src"):
    if str(entry) not in sys.path:
        sys.path.insert(0, str(entry))


import pytest

from scanbridge.runtime.env_policy import SCANNER_OPTS_ENV, SCANNER_PARAMS_ENV
from tests.env_helpers import restore_env as _restore_env
from tests.env_helpers import set_env as _set_env


@pytest.fixture(autouse=True)
def _clean_scanner_env():
    previous = _set_env({SCANNER_PARAMS_ENV: None, SCANNER_OPTS_ENV: None})
    try:
        yield
    finally:
        _restore_env(previous)


@pytest.fixture
def env_scope():
    return _set_env


@pytest.fixture
def restore_env():
    return _restore_env


@pytest.fixture
def write_tree():
    def _write(root: Path, files: list[str]) -> Path:
        for rel in files:
            target = root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(f"// {rel}\n", encoding="utf-8")
        return root

    return _write


@pytest.fixture
def scenario_project(tmp_path: Path, write_tree) -> Path:
    """Multi-module layout with declared, undeclared, report and skipped files."""
    root = tmp_path / "proj"
    write_tree(
        root,
        [
            "src/Main.java",
            "extra/Util.java",
            "target/report.xml",
            "moduleB/src/Other.java",
            "moduleB/scripts/tool.py",
        ],
    )
    return root


@pytest.fixture
def scenario_snapshot_payload(scenario_project: Path) -> dict[str, object]:
    root = scenario_project
    return {
        "modules": [
            {
                "key": "com.example:parent",
                "base_dir": str(root),
                "execution_root": True,
            },
            {
                "key": "com.example:moduleB",
                "base_dir": str(root / "moduleB"),
            },
        ],
        "declared_properties": {
            "sonar.projectBaseDir": str(root),
            "sonar.sources": str(root / "src"),
            "com.example:moduleB.sonar.sources": str(root / "moduleB" / "src"),
            "sonar.report.paths": "target/report.xml",
        },
        "skipped_base_dirs": [str(root / "moduleB")],
    }


@pytest.fixture
def write_snapshot(tmp_path: Path):
    def _write(payload: dict[str, object], name: str = "snapshot.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload, indent=2, sort_keys=True) + "\n", encoding="utf-8")
        return path

    return _write
