"""
Configuration settings for the application
"""
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./sql_app.db"


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,  # Allow both field name and alias
        extra="ignore",
    )

    # RevenueCat webhook authorization (sent as "Authorization: Bearer <secret>")
    revenuecat_webhook_secret: Optional[str] = Field(default=None, alias="REVENUECAT_WEBHOOK_SECRET")

    # Infrastructure configuration
    database_url: Optional[str] = Field(default=DEFAULT_DATABASE_URL, alias="DATABASE_URL")
    log_dir: Path = Field(default=Path("./logs"), alias="LOG_DIR")

    # Render.com deployment configuration
    render: Optional[str] = Field(default=None, alias="RENDER")

    # Environment configuration
    env: Optional[str] = Field(default=None, alias="ENV")


# Instantiate settings object
settings = Settings()

# Determine if we're in production mode
IS_PRODUCTION = bool(settings.render) or bool(settings.env and settings.env.lower() == "production")


def get_settings() -> Settings:
    """
    FastAPI dependency returning the process-wide settings.
    Tests override this through app.dependency_overrides.
    """
    return settings
