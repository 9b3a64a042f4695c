"""Application configuration using pydantic-settings."""
import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Storage - one JSON document per collection inside data_dir
    data_dir: Path = Field(default=Path("data"), validation_alias="DATA_DIR")
    bookmarks_file: str = Field(default="bookmarks.json", validation_alias="BOOKMARKS_FILE")
    categories_file: str = Field(default="categories.json", validation_alias="CATEGORIES_FILE")

    # Color assigned to the "Uncategorized" category when it is first created
    uncategorized_color: str = Field(default="#808080", validation_alias="UNCATEGORIZED_COLOR")

    # CORS - comma-separated list of allowed origins (stored as string, parsed via property)
    cors_origins_str: str = Field(default="*", validation_alias="CORS_ORIGINS")

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Reject log levels the logging module doesn't know."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: '{v}'")
        return level

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins string into a list."""
        if not self.cors_origins_str:
            return []
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
