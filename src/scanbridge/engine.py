from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Protocol

from scanbridge.exceptions import ScanBridgeError

_STDOUT_ALIAS = "-"


class AnalysisEngine(Protocol):
    def start(self) -> None: ...

    def server_version(self) -> str | None: ...

    def set_global_property(self, key: str, value: str) -> None: ...

    def execute(self, properties: Mapping[str, str]) -> None: ...


@dataclass
class FileEngine:
    """Offline engine: reports a fixed server version and dumps properties as JSON."""

    output: str = _STDOUT_ALIAS
    reported_version: str | None = None
    global_properties: dict[str, str] = field(default_factory=dict)
    started: bool = False

    def start(self) -> None:
        self.started = True

    def server_version(self) -> str | None:
        return self.reported_version

    def set_global_property(self, key: str, value: str) -> None:
        self.global_properties[key] = value

    def render(self, properties: Mapping[str, str]) -> str:
        payload = {**self.global_properties, **properties}
        return json.dumps(payload, indent=2, sort_keys=True) + "\n"

    def execute(self, properties: Mapping[str, str]) -> None:
        if not self.started:
            raise ScanBridgeError("analysis engine was not started")
        text = self.render(properties)
        if self.output == _STDOUT_ALIAS:
            sys.stdout.write(text)
            return
        path = Path(self.output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
