# render_deploy/config.py
"""Settings for a single deploy run.

Each value is looked up in the explicit inputs first (command-line flags or
GitHub Actions ``INPUT_*`` variables) and in the plain environment second.
The first non-empty value wins.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from . import RENDER_API_BASE
from .errors import ConfigurationError

# field -> (input name, environment variable)
SETTING_SOURCES = {
    "service_id": ("service-id", "SERVICEID"),
    "api_key": ("api-key", "APIKEY"),
    "wait_for_success": ("wait-for-success", "WAIT_FOR_SUCCESS"),
    "api_base_url": ("api-base-url", "RENDER_API_BASE"),
    "poll_interval": ("poll-interval", "POLL_INTERVAL"),
    "max_polls": ("max-polls", "MAX_POLLS"),
    "request_timeout": ("request-timeout", "REQUEST_TIMEOUT"),
    "log_level": (None, "LOG_LEVEL"),
    "metrics_file": (None, "METRICS_FILE"),
}


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    service_id: str
    api_key: str
    wait_for_success: bool = False
    api_base_url: str = RENDER_API_BASE
    poll_interval: float = Field(10, gt=0)
    max_polls: Optional[int] = Field(None, ge=1)
    request_timeout: float = Field(30, gt=0)
    log_level: str = "INFO"
    metrics_file: Optional[str] = None

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        value = value.upper()
        try:
            logger.level(value)
        except ValueError:
            raise ValueError(f"unknown log level {value!r}")
        return value


def resolve_setting(
    input_name: Optional[str],
    env_name: str,
    inputs: Mapping[str, Optional[str]],
    environ: Mapping[str, str],
) -> Optional[str]:
    """Return the first non-empty value of ``inputs[input_name]`` and ``environ[env_name]``."""
    if input_name:
        value = inputs.get(input_name)
        if value:
            return value
    value = environ.get(env_name)
    if value:
        return value
    return None


def action_inputs(environ: Mapping[str, str]) -> Dict[str, str]:
    """Collect GitHub Actions inputs (``INPUT_SERVICE-ID`` -> ``service-id``)."""
    inputs = {}
    for input_name, _ in SETTING_SOURCES.values():
        if input_name is None:
            continue
        key = "INPUT_" + input_name.replace(" ", "_").upper()
        value = environ.get(key, "").strip()
        if value:
            inputs[input_name] = value
    return inputs


def load_dotenv_file(path: str = ".env") -> bool:
    env_path = Path(path)
    if not env_path.exists():
        return False
    try:
        return load_dotenv(env_path, override=False)
    except Exception as e:  # pragma: no cover
        logger.warning(f"Failed to load {path}: {e}")
        return False


def load_settings(
    inputs: Optional[Mapping[str, Optional[str]]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    if environ is None:
        environ = os.environ
    merged: Dict[str, Optional[str]] = dict(action_inputs(environ))
    merged.update({k: v for k, v in (inputs or {}).items() if v})

    values = {}
    for field, (input_name, env_name) in SETTING_SOURCES.items():
        value = resolve_setting(input_name, env_name, merged, environ)
        if value is not None:
            values[field] = value

    missing = [
        SETTING_SOURCES[f][0] for f in ("service_id", "api_key") if f not in values
    ]
    if missing:
        raise ConfigurationError(f"Missing required input(s): {', '.join(missing)}")

    # any non-empty string turns waiting on
    values["wait_for_success"] = bool(values.get("wait_for_success"))

    try:
        return Settings(**values)
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors())
        raise ConfigurationError(f"Invalid configuration value(s): {fields}") from e
