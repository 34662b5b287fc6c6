"""Configuration file loading."""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from schema_export.errors import ConfigError
from schema_export.models import ExportConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.yaml")

_ENV_REFERENCE = re.compile(r"^\$\{([A-Za-z_][A-Za-z0-9_]*)\}$")


def resolve_env_references(value: Any) -> Any:
    """Recursively replace ``${VAR}`` string values with environment variables.

    Args:
        value: Parsed YAML value (mapping, list or scalar)

    Returns:
        The value with every ``${VAR}`` reference substituted

    Raises:
        ConfigError: If a referenced variable is not set
    """
    if isinstance(value, dict):
        return {key: resolve_env_references(item) for key, item in value.items()}
    if isinstance(value, list):
        return [resolve_env_references(item) for item in value]
    if isinstance(value, str):
        match = _ENV_REFERENCE.match(value)
        if match:
            env_var = match.group(1)
            if env_var not in os.environ:
                raise ConfigError(f"Environment variable '{env_var}' referenced in config is not set")
            return os.environ[env_var]
    return value


def load_config(path: Path | str = DEFAULT_CONFIG_PATH) -> ExportConfig:
    """Load the export configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file

    Returns:
        Parsed configuration with database profiles and output settings

    Raises:
        ConfigError: If the file cannot be read, parsed or validated
    """
    config_path = Path(path)
    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read config file {config_path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config file {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping at the top level")

    # Empty sections ("output:" with nothing under it) fall back to defaults
    data = {key: value for key, value in data.items() if value is not None}
    data = resolve_env_references(data)

    try:
        config = ExportConfig.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}" for error in e.errors()
        )
        raise ConfigError(f"Invalid config file {config_path}: {problems}") from e

    logger.info(f"Loaded {len(config.databases)} database profiles from {config_path}")
    return config
