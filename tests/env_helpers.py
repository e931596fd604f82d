from __future__ import annotations

import json
import os
from typing import Mapping

from scanbridge.runtime.env_policy import SCANNER_PARAMS_ENV


def set_env(values: Mapping[str, str | None]) -> dict[str, str | None]:
    """Apply *values* (None unsets) and return what they replaced."""
    previous = {key: os.environ.get(key) for key in values}
    for key, value in values.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value
    return previous


def restore_env(previous: Mapping[str, str | None]) -> None:
    set_env(previous)


def scanner_params_env(properties: Mapping[str, str]) -> dict[str, str | None]:
    return {SCANNER_PARAMS_ENV: json.dumps(dict(properties), sort_keys=True)}
