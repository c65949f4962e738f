"""Configuration for hanafs.

Settings are read from ``HANAFS_*`` environment variables (and an optional
``.env`` file) through pydantic-settings. Library code takes a ``Settings``
instance explicitly where it can and falls back to ``get_settings()``.

Created: 2026-03-02
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_REPOSITORY_ROOT = "/sap/hana/xs/dt/base/file"


class Settings(BaseSettings):
    """Runtime settings for the repository client."""

    model_config = SettingsConfigDict(
        env_prefix="HANAFS_",
        env_file=".env",
        extra="ignore",
    )

    transport_scheme: str = Field(
        default="https", description="Scheme used to reach the repository server"
    )
    repository_root: str = Field(
        default=DEFAULT_REPOSITORY_ROOT,
        description="Server path of the file API collection",
    )
    request_timeout: float = Field(default=30.0, description="Per-request timeout in seconds")
    verify_tls: bool = Field(default=True)
    debounce_ms: int = Field(
        default=5, description="Coalescing window for in-memory change events"
    )
    use_server_timestamps: bool = Field(
        default=False,
        description="Report LocalTimeStamp as mtime/ctime instead of zero",
    )
    check_write_flags: bool = Field(
        default=False,
        description="Stat the target before PUT to honour create/overwrite flags",
    )
    log_level: str = Field(default="INFO")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
