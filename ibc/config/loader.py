import logging
from pathlib import Path
from typing import Optional
import yaml
from pydantic import ValidationError
from ibc.config.models import AppConfig
from ibc.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("conf/ibc.yaml")

def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """
    Load configuration from a YAML file.
    A missing or empty file yields the defaults; unreadable or invalid content
    raises ConfigurationError.
    """
    config_file = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    if not config_file.exists():
        logger.debug(f"Config file {config_file} not found, using defaults")
        return AppConfig()

    try:
        with open(config_file, 'r') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to read config file {config_file}: {e}") from e

    if data is None:
        return AppConfig()
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_file} must contain a mapping at the top level.")

    try:
        return AppConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config file {config_file}: {e}") from e
