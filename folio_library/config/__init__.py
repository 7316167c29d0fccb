"""Configuration module for folio_library.

Provides configuration loading from YAML and environment variables.

Public Interface:
    - FolioSettings: Settings model
    - load_config: Load configuration
    - create_default_config: Create default config file
    - get_config_path: Get config file path
"""

from .loader import create_default_config
from .loader import get_config_path
from .loader import load_config
from .settings import IN_MEMORY_DB
from .settings import FolioSettings

__all__ = [
    "FolioSettings",
    "IN_MEMORY_DB",
    "load_config",
    "create_default_config",
    "get_config_path",
]
