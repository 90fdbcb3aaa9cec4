"""Lint configuration loading."""
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from colcheck.config.settings import LintConfig

logger = logging.getLogger(__name__)

PROJECT_CONFIG_NAME = '.colcheck.yaml'
ENV_PREFIX = 'COLCHECK_'


class ConfigError(ValueError):
    """Raised when lint configuration loading fails."""


def load_lint_config(
    config_file: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None
) -> LintConfig:
    """Load lint configuration.

    Loads configuration with the following priority:
    1. Explicit --config path (highest priority)
    2. ./.colcheck.yaml in the working directory
    3. ~/.colcheck/config.yaml
    4. COLCHECK_* environment variables
    5. Built-in defaults

    Values in ``overrides`` (typically CLI flags) are applied last; ``None``
    values are ignored.

    Args:
        config_file: Optional explicit config file path
        overrides: Optional setting overrides

    Returns:
        Validated LintConfig

    Raises:
        ConfigError: If a file is unreadable or a setting is invalid
    """
    data = _load_raw_config(config_file)

    for key, value in (overrides or {}).items():
        if value is None:
            continue
        if isinstance(value, list):
            # Exclusion patterns from the command line add to the file's
            data[key] = list(data.get(key, [])) + value
        else:
            data[key] = value

    try:
        return LintConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration:\n{e}") from e


def _load_raw_config(config_file: Optional[str]) -> Dict[str, Any]:
    if config_file:
        config = _load_yaml_config(config_file)
        logger.info("Loaded lint config from: %s", config_file)
        return config

    for candidate in _default_paths():
        if candidate.exists():
            config = _load_yaml_config(str(candidate))
            logger.info("Loaded lint config from: %s", candidate)
            return config

    env_config = _load_from_env()
    if env_config:
        logger.info("Loaded lint config from environment variables")
        return env_config

    logger.debug("No lint config found. Using defaults.")
    return {}


def _default_paths() -> List[Path]:
    return [
        Path.cwd() / PROJECT_CONFIG_NAME,
        Path.home() / '.colcheck' / 'config.yaml',
    ]


def _load_yaml_config(file_path: str) -> Dict[str, Any]:
    """Load YAML configuration file.

    Args:
        file_path: Path to YAML config file

    Returns:
        Parsed configuration dictionary (empty for an empty file)

    Raises:
        ConfigError: If file is invalid or missing
    """
    try:
        if not os.path.exists(file_path):
            raise ConfigError(f"Configuration file not found: {file_path}")

        with open(file_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)

        if config is None:
            return {}

        if not isinstance(config, dict):
            raise ConfigError(
                f"Configuration file must contain a YAML dictionary: {file_path}"
            )

        return config

    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML configuration: {file_path}\n{e}"
        ) from e
    except OSError as e:
        raise ConfigError(
            f"Error reading configuration file: {file_path}\n{e}"
        ) from e


def _load_from_env() -> Optional[Dict[str, Any]]:
    """Load configuration from COLCHECK_* environment variables.

    List settings (EXCLUDE_TABLES, EXCLUDE_COLUMNS) are comma separated.

    Returns:
        Configuration dictionary or None if no env vars found
    """
    config: Dict[str, Any] = {}

    for param in ('DIALECT', 'SEVERITY', 'FAIL_ON'):
        value = os.getenv(f"{ENV_PREFIX}{param}")
        if value:
            config[param.lower()] = value

    minority_only = os.getenv(f"{ENV_PREFIX}MINORITY_ONLY")
    if minority_only:
        config['minority_only'] = minority_only.strip().lower() in ('1', 'true', 'yes', 'on')

    for param in ('EXCLUDE_TABLES', 'EXCLUDE_COLUMNS'):
        value = os.getenv(f"{ENV_PREFIX}{param}")
        if value:
            config[param.lower()] = [p.strip() for p in value.split(',') if p.strip()]

    return config if config else None
