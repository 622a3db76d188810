"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from grounded_search.configs.base import BaseSettings
from grounded_search.configs.genai import GenAISettings
from grounded_search.configs.rendering import RenderSettings, SearchSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    genai: GenAISettings = Field(default_factory=GenAISettings)
    rendering: RenderSettings = Field(default_factory=RenderSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from grounded_search.configs import get_settings
        settings = get_settings()
    """
    return Settings()
