from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional

import platformdirs
import yaml
from pydantic import ValidationError

from ..core.errors import ConfigurationError
from .settings import AppConfig, EnvSettings, FileConfig

logger = logging.getLogger(__name__)


APP_NAME = "dependabot-reporter"
DEFAULT_CONFIG_FILENAME = "config.yaml"


def default_config_path() -> Path:
    """Return ./config.yaml when present, else the per-user config location."""
    local = Path(DEFAULT_CONFIG_FILENAME)
    if local.is_file():
        return local
    return Path(platformdirs.user_config_dir(APP_NAME)) / DEFAULT_CONFIG_FILENAME


def read_config_file(path: str | Path) -> FileConfig:
    """Parse the YAML config file at path.

    A missing file yields an empty FileConfig; an unreadable, unparsable or
    non-mapping document, or one with unknown keys, raises ConfigurationError.
    """
    p = Path(path)
    if not p.is_file():
        logger.debug(f"No config file at {p}, continuing with environment and defaults")
        return FileConfig()

    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Error reading config file {p}: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing config file {p}: {e}") from e

    if data is None:
        return FileConfig()
    if not isinstance(data, dict):
        raise ConfigurationError(f"Error parsing config file {p}: expected a mapping of settings")

    try:
        cfg = FileConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Error parsing config file {p}: {describe_validation_error(e)}") from e
    logger.info(f"Loaded config file {p}")
    return cfg


def build_config(values: Mapping[str, Any]) -> AppConfig:
    try:
        return AppConfig.model_validate(dict(values))
    except ValidationError as e:
        raise ConfigurationError(describe_validation_error(e)) from e


def load_config(
    config_file: Optional[str | Path] = None,
    *,
    output_format: Optional[str] = None,
    output_dir: Optional[str | Path] = None,
    timeout_seconds: Optional[float] = None,
    max_retries: Optional[int] = None,
    api_url: Optional[str] = None,
    github_token: Optional[str] = None,
) -> AppConfig:
    """Resolve the effective configuration.

    Precedence, lowest first: defaults, config file, environment (DEPENDABOT_*),
    explicit overrides. The command line never passes github_token; it exists
    for library callers.
    """
    path = Path(config_file) if config_file else default_config_path()
    values = read_config_file(path).model_dump(exclude_none=True)

    try:
        env = EnvSettings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid environment setting: {describe_validation_error(e)}") from e

    if env.token:
        logger.debug("Using token from DEPENDABOT_TOKEN")
        values["github_token"] = env.token
    if env.output_dir is not None:
        values["output_dir"] = env.output_dir
    if env.timeout_seconds is not None:
        values["timeout_seconds"] = env.timeout_seconds

    overrides = {
        "output_format": output_format,
        "output_dir": output_dir,
        "timeout_seconds": timeout_seconds,
        "max_retries": max_retries,
        "api_url": api_url,
        "github_token": github_token,
    }
    # An empty flag means "not given", so the file value survives
    values.update({k: v for k, v in overrides.items() if v is not None and v != ""})

    config = build_config(values)
    logger.info(f"Resolved configuration: format={config.output_format.value}, output_dir={config.output_dir}")
    return config


def describe_validation_error(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", ()))
        msg = str(err.get("msg", ""))
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts)
