"""
Rendering and search session configuration settings.

Dependencies: pydantic_settings
System role: Presentation and request-history configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RenderSettings(BaseSettings):
    """Footnote rendering configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RENDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    failure_message: str = Field(
        default="Sorry, an error occurred while processing your request.",
        description="Fixed user-visible message shown when a request fails",
    )
    anchor_prefix: str = Field(
        default="footnote",
        description="Prefix for footnote anchor ids",
    )
    untitled_label: str = Field(
        default="Untitled",
        description="Label used for sources without a title",
    )
    segment_offsets_in_bytes: bool = Field(
        default=False,
        description="Treat grounding segment offsets as UTF-8 byte offsets",
    )


class SearchSettings(BaseSettings):
    """Search session configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    history_limit: int = Field(
        default=50,
        ge=1,
        description="Maximum number of archived answers kept per session",
    )
