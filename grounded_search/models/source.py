"""
Source domain model.

Represents a deduplicated web source that grounding citations point at.

Dependencies: pydantic
System role: Citation source data structure
"""

from pydantic import BaseModel, ConfigDict, Field


class SourceRecord(BaseModel):
    """Deduplicated citation source, identified by its URI."""

    model_config = ConfigDict(frozen=True)

    uri: str = Field(description="Source URI (identity key)")
    title: str | None = Field(default=None, description="Source title as first seen")
