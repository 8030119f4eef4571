"""
Scraper Configuration
Loads settings from environment variables with sensible defaults.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Scraper settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="OPPORTUNITY_SCRAPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Browser Configuration
    headless: bool = True
    browser_args: List[str] = [
        "--no-sandbox",
        "--disable-setuid-sandbox",
        "--disable-dev-shm-usage",
        "--disable-accelerated-2d-canvas",
        "--disable-gpu",
    ]
    viewport_width: int = 1920
    viewport_height: int = 1080
    locale: str = "fr-FR"
    accept_language: str = "fr-FR,fr;q=0.9,en-US;q=0.8,en;q=0.7"
    blocked_resource_types: List[str] = ["image", "stylesheet", "font", "media"]

    # Scraper Configuration (timeouts in milliseconds, as Playwright expects)
    navigation_timeout_ms: int = 30000
    detail_timeout_ms: int = 15000
    default_max_pages: int = 3

    # Logging Configuration
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
