"""Path resolution for folio storage locations.

This module provides path resolution based on the FOLIO_HOME environment variable,
following an XDG-like directory structure within that root.

Contract:
- Inputs: Environment variables (FOLIO_HOME, FOLIO_*_DIR overrides)
- Outputs: Resolved Path objects
- Side Effects: Creates directories if they don't exist
"""

import os
from pathlib import Path


def get_home_dir() -> Path:
    """Get FOLIO_HOME from environment.

    Returns:
        Path to root directory (default: .folio)
    """
    root = os.environ.get("FOLIO_HOME", ".folio")
    return Path(root).resolve()


def _resolve_dir(default: Path, env_var: str) -> Path:
    directory = default

    env_override: str | None = os.environ.get(env_var)
    if env_override is not None:
        directory = Path(env_override).resolve()

    directory.mkdir(parents=True, exist_ok=True)
    return directory


def get_config_dir() -> Path:
    """Get configuration directory.

    Returns:
        Path to config directory ($FOLIO_HOME/config)

    Environment Variables:
        FOLIO_CONFIG_DIR: Override config directory location
    """
    return _resolve_dir(get_home_dir() / "config", "FOLIO_CONFIG_DIR")


def get_state_dir() -> Path:
    """Get state directory holding the admin database.

    Returns:
        Path to state directory ($FOLIO_HOME/state)

    Environment Variables:
        FOLIO_STATE_DIR: Override state directory location
    """
    return _resolve_dir(get_home_dir() / "state", "FOLIO_STATE_DIR")


def get_log_dir() -> Path:
    """Get log directory.

    Returns:
        Path to log directory ($FOLIO_HOME/logs/foliod)

    Environment Variables:
        FOLIO_LOG_DIR: Override log directory location

    Example:
        >>> log_dir = get_log_dir()
        >>> assert log_dir.name == "foliod" or "FOLIO_LOG_DIR" in os.environ
    """
    return _resolve_dir(get_home_dir() / "logs" / "foliod", "FOLIO_LOG_DIR")


def get_default_db_path() -> Path:
    """Get default admin database location ($FOLIO_HOME/state/admin.db)."""
    return get_state_dir() / "admin.db"
