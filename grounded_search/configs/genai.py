"""
Gemini configuration settings.

Settings for the Google GenAI client used to stream search-grounded answers.

Dependencies: pydantic_settings
System role: Generative search backend configuration
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SYSTEM_INSTRUCTION = (
    "Input text shall be used as a search key. Search key should utilize and respond "
    "with the most useful, concise, accurate, and understandable context possible. "
    "If the response has low confidence in qualities such as comprehension, logic, or "
    "inability to provide coherent and cohesive should be replaced with a confident and "
    "level attitude that the information presented is noteworthy in its lack of quality.\n\n"
    "The response should attempt to be within one paragraph, less than four sentences. "
    "The intent behind where the response is rendered is as a response to a highlight "
    "or curious query from a user's phone interface.\n\n"
    "If the search term represents a financial instrument such as a public stock ticker, "
    "provide latest price, last market day change in percentage and price delta, volume, "
    "and at least one sentence, delineated by a paragraph break, regarding the latest news "
    "or social media trending conversation around that particular stock or company. In "
    "this scenario regarding financial instruments should always provide data freshness "
    "information such as relevant dates relative to today. In a following paragraph, "
    "provide quantitative analysis against the most relevant prior historical period "
    "(last day, last week, last quarter, last year, or similar)\n\n"
    "The search term:"
)


class GenAISettings(BaseSettings):
    """Google GenAI (Gemini) configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GEMINI_",
        populate_by_name=True,
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "GOOGLE_API_KEY"),
        description="API key for the Gemini API",
    )
    model: str = Field(
        default="gemini-2.5-flash",
        description="Gemini model identifier",
    )
    system_instruction: str = Field(
        default=DEFAULT_SYSTEM_INSTRUCTION,
        description="System instruction prepended to every search query",
    )
