"""Configuration loading."""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from x509templates.models.config import AppConfig
from x509templates.services.yaml_service import YAMLService

logger = logging.getLogger("x509templates")

CONFIG_ENV_VAR = "X509TEMPLATES_CONFIG"
DEFAULT_CONFIG_PATH = "config.yaml"


@lru_cache(maxsize=None)
def get_config(path: Optional[str] = None) -> AppConfig:
    """
    Get application configuration.

    The file is taken from ``path``, then from the X509TEMPLATES_CONFIG
    environment variable, then ``config.yaml``. A missing file gives the
    defaults.

    Args:
        path: Optional path to a YAML config file

    Returns:
        Application configuration
    """
    config_path = Path(path or os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH))
    if not config_path.exists():
        logger.debug(f"No config file at {config_path}, using defaults")
        return AppConfig()

    config_data = YAMLService.load_yaml(config_path)
    return AppConfig(**config_data)


def reset_config() -> None:
    """Forget the cached configuration."""
    get_config.cache_clear()
