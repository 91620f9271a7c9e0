"""
Configuration management for firm_research.

Uses pydantic-settings for type-safe configuration with automatic
environment variable loading and validation.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from firm_research.constants import (
    GEOCODE_MIN_CONFIDENCE,
    GEOCODE_TIMEOUT,
    PAGE_LOAD_TIMEOUT,
    PLACES_TIMEOUT,
    SELF_LISTING_MIN_SCORE,
    SITEMAP_TIMEOUT,
    TEXT_EXTRACTION_TIMEOUT,
    USER_AGENT,
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every API key is optional: a missing key turns the matching lookup into
    a recorded warning instead of a startup failure.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra env vars
    )

    # Place search (Google Places Text Search)
    google_places_api_key: str | None = Field(
        default=None,
        description="Google Places API key (optional)",
    )

    # Geocoding (OpenCage)
    opencage_api_key: str | None = Field(
        default=None,
        description="OpenCage geocoding API key (optional)",
    )

    # Text extraction (OpenAI)
    openai_api_key: str | None = Field(
        default=None,
        description="OpenAI API key for the optional text-extraction service",
    )
    openai_model: str = Field(
        default="gpt-4o-mini",
        description="Chat model used for text extraction",
    )

    # HTTP / browser
    user_agent: str = Field(default=USER_AGENT, description="User-Agent header")
    headless: bool = Field(default=True, description="Run the browser headless")
    page_load_timeout: float = Field(default=PAGE_LOAD_TIMEOUT, gt=0)
    sitemap_timeout: float = Field(default=SITEMAP_TIMEOUT, gt=0)
    places_timeout: float = Field(default=PLACES_TIMEOUT, gt=0)
    geocode_timeout: float = Field(default=GEOCODE_TIMEOUT, gt=0)
    text_extraction_timeout: float = Field(default=TEXT_EXTRACTION_TIMEOUT, gt=0)

    # Resolution thresholds
    geocode_min_confidence: int = Field(default=GEOCODE_MIN_CONFIDENCE, ge=0, le=10)
    self_listing_min_score: float = Field(default=SELF_LISTING_MIN_SCORE, ge=0)

    # Paths
    cache_dir: Path = Field(default=Path("data/cache"))
    reports_dir: Path = Field(default=Path("reports"))

    @field_validator("user_agent", "openai_model", mode="before")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from string values."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator(
        "google_places_api_key", "opencage_api_key", "openai_api_key", mode="before"
    )
    @classmethod
    def empty_string_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for optional fields."""
        if isinstance(v, str):
            v = v.strip()
            return v if v else None
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()

