from __future__ import annotations

import json
import os

from scanbridge.exceptions import ConfigurationError

SCANNER_PARAMS_ENV = "SONARQUBE_SCANNER_PARAMS"
SCANNER_OPTS_ENV = "SCANBRIDGE_OPTS"


def env_text(name: str, *, default: str = "") -> str:
    return os.getenv(name, default).strip()


def env_properties() -> dict[str, str]:
    """Analysis properties passed as a JSON object in the environment."""
    raw = env_text(SCANNER_PARAMS_ENV)
    if not raw:
        return {}
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            f"Failed to parse JSON in {SCANNER_PARAMS_ENV} environment variable"
        ) from exc
    if not isinstance(payload, dict):
        raise ConfigurationError(f"{SCANNER_PARAMS_ENV} must hold a JSON object")
    return {str(key): str(value) for key, value in payload.items()}


def scanner_opts() -> str | None:
    return env_text(SCANNER_OPTS_ENV) or None
