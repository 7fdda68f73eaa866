"""Config loader — reads YAML, applies DUAL_* env var overrides."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import ValidationError as PydanticValidationError

from dual_tracker.config.schema import AppConfig
from dual_tracker.errors import ConfigError


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from a YAML file, then apply env var overrides.

    If *path* is None or the file doesn't exist, returns defaults.

    Environment variable overrides:
        DUAL_LOG_LEVEL      -> logging.level
        DUAL_LOG_FORMAT     -> logging.format
        DUAL_API_PORT       -> api.port
        DUAL_STABLE_ASSETS  -> assets.stable_assets (comma-separated)

    Raises:
        ConfigError: the merged document does not validate.
    """
    data: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            with open(p) as f:
                data = yaml.safe_load(f) or {}

    # Apply env var overrides
    log_level = os.environ.get("DUAL_LOG_LEVEL")
    if log_level:
        data.setdefault("logging", {})["level"] = log_level

    log_format = os.environ.get("DUAL_LOG_FORMAT")
    if log_format:
        data.setdefault("logging", {})["format"] = log_format

    api_port = os.environ.get("DUAL_API_PORT")
    if api_port:
        data.setdefault("api", {})["port"] = api_port

    stable_assets = os.environ.get("DUAL_STABLE_ASSETS")
    if stable_assets:
        data.setdefault("assets", {})["stable_assets"] = stable_assets.split(",")

    try:
        return AppConfig.model_validate(data)
    except PydanticValidationError as exc:
        raise ConfigError(f"invalid configuration: {exc}") from exc
