"""Settings model for folio.

This module defines the configuration for both halves of the system: the
foliod admin API (server bind, database, CORS) and the content
synchronization core that talks to it (API base, cache TTL, timeouts).

Contract:
- Inputs: Environment variables, YAML files
- Outputs: Validated settings objects
- Side Effects: None (read-only)
"""

from pathlib import Path

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

IN_MEMORY_DB = ":memory:"


class FolioSettings(BaseSettings):
    """Configuration for folio.

    Attributes:
        host: Listen address for foliod (default: 127.0.0.1)
        port: Listen port for foliod (default: 8430)
        log_level: Logging level (default: info)
        cors_origins: Origins allowed to call the admin API
        db_path: Admin database file, or ":memory:" (default: state dir)
        api_base: Base URL the synchronization core fetches from
        cache_ttl_seconds: Freshness window for the page list (default: 5 minutes)
        request_timeout_seconds: Timeout applied to every store request

    Example:
        >>> settings = FolioSettings()
        >>> assert settings.cache_ttl_seconds == 300
        >>> assert settings.port == 8430
    """

    model_config = SettingsConfigDict(
        env_prefix="FOLIO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "127.0.0.1"
    port: int = Field(default=8430, ge=1024, le=65535)
    log_level: str = "info"
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
    )

    db_path: str | None = None

    api_base: str = "http://127.0.0.1:8430"
    cache_ttl_seconds: float = Field(default=300.0, gt=0)
    request_timeout_seconds: float = Field(default=10.0, gt=0)

    @field_validator("db_path")
    @classmethod
    def expand_and_resolve_path(cls, v: str | None) -> str | None:
        """Expand ~ and resolve to absolute path.

        ":memory:" and None pass through untouched; None means the default
        location under the state directory.
        """
        if v is None or v == IN_MEMORY_DB:
            return v
        return str(Path(v).expanduser().resolve())

    @field_validator("api_base")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")
