"""Configuration loader for dbsecrets-toolkit."""
import os
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .errors import ConfigError
from .models import SecretsConfig

logger = logging.getLogger(__name__)

REGION_ENV_VAR = "region"
CONFIG_PATH_ENV_VAR = "DBSECRETS_CONFIG"


def _default_config_path() -> Path:
    return Path.home() / ".config" / "dbsecrets-toolkit" / "config.yml"


def get_config_path() -> Optional[Path]:
    """
    Get config file path.

    Priority order:
    1. DBSECRETS_CONFIG environment variable
    2. Default location: ~/.config/dbsecrets-toolkit/config.yml

    Returns:
        Path to the config file, or None if no config file exists

    Raises:
        ConfigError: If DBSECRETS_CONFIG points to a missing file
    """
    override = os.getenv(CONFIG_PATH_ENV_VAR)
    if override:
        config_path = Path(override).expanduser()
        if not config_path.is_file():
            raise ConfigError(
                f"Config file set by {CONFIG_PATH_ENV_VAR} not found: {config_path}"
            )
        return config_path

    default_config = _default_config_path()
    if default_config.is_file():
        return default_config

    logger.debug(f"No config file at {default_config}")
    return None


def load_config() -> Dict[str, Any]:
    """
    Load and validate the optional YAML configuration file.

    Format:
        aws:
          region: eu-west-1

    Returns:
        Configuration dict, empty if no config file exists

    Raises:
        ConfigError: If the file cannot be read or has an invalid layout
    """
    # Resolved on every call so a changed DBSECRETS_CONFIG takes effect
    config_path = get_config_path()
    if config_path is None:
        return {}

    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML config at {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config file at {config_path}: {e}") from e

    if config is None:
        logger.debug(f"Config file at {config_path} is empty")
        return {}

    if not isinstance(config, dict):
        raise ConfigError(f"Config at {config_path} must be a mapping")

    aws = config.get('aws')
    if aws is not None:
        if not isinstance(aws, dict):
            raise ConfigError(
                f"'aws' section in {config_path} must be a mapping\n"
                f"Required format:\n"
                f"aws:\n"
                f"  region: eu-west-1"
            )
        if 'region' in aws and not isinstance(aws['region'], str):
            raise ConfigError("'aws.region' must be a string")

    logger.debug(f"Configuration loaded from {config_path}")
    return config


def resolve_region() -> Tuple[str, str]:
    """
    Resolve the AWS region.

    Priority order:
    1. ``region`` environment variable (passed through unvalidated)
    2. ``aws.region`` in the config file

    Returns:
        Tuple of (region, source) where source is "env", "config" or "unset"
    """
    env_region = os.getenv(REGION_ENV_VAR)
    if env_region is not None:
        return env_region, "env"

    region = (load_config().get('aws') or {}).get('region')
    if region:
        return region, "config"

    return "", "unset"


def config_from_env(secret_env_var: str, region: Optional[str] = None) -> SecretsConfig:
    """
    Build a SecretsConfig from process environment.

    Args:
        secret_env_var: Name of the environment variable holding the secret id
        region: Explicit region; when given, env and config file are not consulted

    Returns:
        SecretsConfig; an unset variable yields an empty secret id, which
        Secrets Manager rejects
    """
    secret_id = os.getenv(secret_env_var, "")
    if region:
        source = "argument"
    else:
        region, source = resolve_region()
    logger.debug(f"Secret id from ${secret_env_var}, region '{region}' from {source}")
    return SecretsConfig(secret_id=secret_id, region=region)
