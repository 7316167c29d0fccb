"""Configuration loading for folio.

This module handles loading configuration from YAML files
and environment variables.

Contract:
- Inputs: Config file paths, environment variables
- Outputs: FolioSettings objects
- Side Effects: Creates default config file if missing
"""

import logging
import os
from pathlib import Path

import yaml

from ..storage.paths import get_config_dir
from ..storage.paths import get_default_db_path
from .settings import FolioSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = """# folio configuration
# Shared by the foliod admin API and the content synchronization core

# Server settings
host: "127.0.0.1"
port: 8430
log_level: "info"
cors_origins:
  - "http://localhost:3000"

# Admin database
# Default: $FOLIO_HOME/state/admin.db
# Use ":memory:" for a throwaway database
# db_path: "~/folio/admin.db"

# Content synchronization
api_base: "http://127.0.0.1:8430"
cache_ttl_seconds: 300
request_timeout_seconds: 10
"""


def get_config_path() -> Path:
    """Get path to config file.

    Returns:
        Path to folio.yaml in config directory

    Example:
        >>> config_path = get_config_path()
        >>> assert config_path.name == "folio.yaml"
    """
    return get_config_dir() / "folio.yaml"


def create_default_config(config_path: Path | None = None) -> Path:
    """Create default config file if it doesn't exist.

    Returns:
        Path of the (possibly pre-existing) config file
    """
    config_path = config_path or get_config_path()

    if config_path.exists():
        logger.debug(f"Config file already exists: {config_path}")
        return config_path

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(DEFAULT_CONFIG, encoding="utf-8")
    logger.info(f"Created default config: {config_path}")
    return config_path


def load_config(config_path: Path | None = None) -> FolioSettings:
    """Load configuration from YAML and environment.

    Environment variables take precedence over YAML settings.
    Variables should be prefixed with FOLIO_ (e.g., FOLIO_CACHE_TTL_SECONDS).

    Args:
        config_path: Optional config file path (default: folio.yaml in config dir)

    Returns:
        Validated settings, with db_path filled in from the state directory
        when the config leaves it unset

    Example:
        >>> settings = load_config()
        >>> assert isinstance(settings, FolioSettings)
        >>> assert settings.cache_ttl_seconds > 0
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        create_default_config(config_path)

    yaml_settings = {}
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                yaml_settings = yaml.safe_load(f) or {}
            logger.debug(f"Loaded config from {config_path}")
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")
            logger.info("Using default settings and environment variables")

    # Only pass YAML values that don't have corresponding env vars,
    # so precedence is defaults < YAML < env vars
    filtered_yaml = {}
    for key, value in yaml_settings.items():
        env_key = f"FOLIO_{key.upper()}"
        if env_key not in os.environ:
            filtered_yaml[key] = value

    settings = FolioSettings(**filtered_yaml)

    if settings.db_path is None:
        settings.db_path = str(get_default_db_path())

    logger.info(
        f"Configuration loaded: api_base={settings.api_base}, "
        f"cache_ttl={settings.cache_ttl_seconds}s, db_path={settings.db_path}"
    )

    return settings
