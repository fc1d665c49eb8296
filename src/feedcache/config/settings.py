"""
Application settings and configuration management.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from feedcache import __version__


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # Database
    database_url: str = Field(default="sqlite+aiosqlite:///./data/feedcache.db")
    db_log_queries: bool = Field(default=False)

    # Storage
    cache_dir: Path = Field(default=Path("./cache"))
    articles_dir: Path = Field(default=Path("./data/articles"))
    logs_dir: Path = Field(default=Path("./logs"))

    # Image fetching
    fetch_timeout: float = Field(default=30.0)
    max_image_bytes: int = Field(default=10 * 1024 * 1024)
    memory_cache_entries: int = Field(default=64)
    max_concurrent_fetches: int = Field(default=4)
    user_agent: str = Field(default=f"feedcache/{__version__}")

    # Preferences
    image_only_on_wifi: bool = Field(default=False)

    @field_validator("cache_dir", "articles_dir", "logs_dir", mode="before")
    @classmethod
    def ensure_path(cls, v: str | Path) -> Path:
        """Ensure directory paths are Path objects."""
        if isinstance(v, str):
            return Path(v)
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    @field_validator("fetch_timeout")
    @classmethod
    def validate_fetch_timeout(cls, v: float) -> float:
        """Validate the HTTP timeout is positive."""
        if v <= 0:
            raise ValueError(f"fetch_timeout must be positive, got {v}")
        return v

    @property
    def images_dir(self) -> Path:
        """Directory holding the persistent image cache."""
        return self.cache_dir / "images"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()


# Global settings instance
settings = get_settings()
