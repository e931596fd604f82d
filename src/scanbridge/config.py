from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from pathlib import Path
from typing import TypeAlias
import tomllib

from scanbridge.version_gate import MIN_SUPPORTED_VERSION

DEFAULT_CONFIG_NAME = "scanbridge.toml"
DEFAULT_HOSTED_URL = "https://sonarcloud.io"

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]


@dataclass(frozen=True)
class BridgeSettings:
    scan_all: bool | None = None
    excluded_dirs: tuple[str, ...] = ()
    min_version: str = MIN_SUPPORTED_VERSION
    hosted_url: str = DEFAULT_HOSTED_URL


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError:
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    if config_path is None:
        base = root if root is not None else Path.cwd()
        config_path = base / DEFAULT_CONFIG_NAME
    return _load_toml(config_path)


def _section(data: TomlTable, name: str) -> TomlTable:
    section = data.get(name, {})
    return section if isinstance(section, dict) else {}


def _normalize_name_list(value: TomlValue) -> list[str]:
    items: list[str] = []
    if value is None:
        return items
    if isinstance(value, str):
        items = [part.strip() for part in value.split(",") if part.strip()]
    elif isinstance(value, (list, tuple, set)):
        for item in value:
            if isinstance(item, str):
                items.extend([part.strip() for part in item.split(",") if part.strip()])
    return [item for item in items if item]


def _as_bool(value: TomlValue) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return False


def _as_text(value: TomlValue, default: str) -> str:
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        text = str(value).strip()
        if text:
            return text
    return default


def load_settings(root: Path | None = None, config_path: Path | None = None) -> BridgeSettings:
    data = load_config(root=root, config_path=config_path)
    discovery = _section(data, "discovery")
    server = _section(data, "server")
    scan_all = discovery.get("scan_all")
    return BridgeSettings(
        scan_all=None if scan_all is None else _as_bool(scan_all),
        excluded_dirs=tuple(_normalize_name_list(discovery.get("excluded_dirs"))),
        min_version=_as_text(server.get("min_version"), MIN_SUPPORTED_VERSION),
        hosted_url=_as_text(server.get("hosted_url"), DEFAULT_HOSTED_URL),
    )
