"""Read-only snapshot of the build tool's multi-module project model."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, ValidationError

from scanbridge.exceptions import ConfigurationError


class ModuleSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    base_dir: str
    execution_root: bool = False
    # Properties set explicitly in the module's build file.
    properties: Dict[str, str] = {}


class ProjectSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    modules: List[ModuleSnapshot]
    # Converter output: top-level and module-scoped analysis properties.
    declared_properties: Dict[str, str] = {}
    # Module roots with fully declared sources, build output dirs, ...
    skipped_base_dirs: List[str] = []

    def top_level_module(self) -> ModuleSnapshot:
        for module in self.modules:
            if module.execution_root:
                return module
        raise ConfigurationError("Build session does not declare a top level project")


def load_snapshot(path: Path) -> ProjectSnapshot:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read project snapshot {path}: {exc}") from exc
    try:
        return ProjectSnapshot.model_validate_json(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid project snapshot {path}: {exc}") from exc
