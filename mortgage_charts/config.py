"""Configuration management for mortgage-charts.

Uses pydantic-settings for type-safe environment variable loading.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MORTGAGE_CHARTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Data Settings
    data_path: Path = Field(
        default=Path("merged_mortgage_data.csv"),
        description="Path to the merged mortgage CSV",
    )
    min_valid_rows: int = Field(
        default=10,
        ge=1,
        description="Minimum complete rows required for the spread analysis",
    )

    # Output Settings
    output_dir: Path = Field(
        default=Path("charts"),
        description="Directory the CLI writes chart HTML files to",
    )

    # Application Settings
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment",
    )
    api_host: str = Field(
        default="127.0.0.1",
        description="API server host",
    )
    api_port: int = Field(
        default=8000,
        description="API server port",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance."""
    return settings
