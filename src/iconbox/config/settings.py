"""Application configuration loaded from the environment."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from platformdirs import user_data_dir
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_data_dir() -> Path:
    return Path(user_data_dir("iconbox", appauthor=False))


class Settings(BaseSettings):
    """Runtime configuration.

    Values come from ``ICONBOX_*`` environment variables or a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="ICONBOX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: Path = Field(
        default_factory=_default_data_dir,
        description="Directory holding library.json and settings.json",
    )
    log_level: str = Field(default="INFO", description="Root log level for iconbox loggers")
    strict_settings: bool = Field(
        default=True,
        description="Reject display settings outside the preset values",
    )
    import_subfolders: bool = Field(
        default=True,
        description="Mirror nested folders as child collections on import",
    )
    frontend_url: str | None = Field(
        default=None,
        description="Page loaded by the desktop window; the bundled frontend build when unset",
    )
    debug: bool = Field(default=False, description="Open the webview with developer tools")

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    """Return the cached application settings."""
    return Settings()


def clear_settings_cache() -> None:
    """Forget cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
