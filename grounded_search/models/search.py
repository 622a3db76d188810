"""
Search API schemas.

Request/response schemas for search operations.

Dependencies: pydantic
System role: Search API contracts
"""

from pydantic import BaseModel, Field

from grounded_search.models.answer import AnnotatedAnswer


class SearchRequest(BaseModel):
    """Request schema for a search query."""

    query: str = Field(min_length=1, description="Search key submitted by the user")


class SearchResponse(BaseModel):
    """Response schema for a finished search."""

    answer: AnnotatedAnswer
    html: str = Field(description="Answer rendered as HTML with footnotes and sources")


class SearchHistoryResponse(BaseModel):
    """Archived answers, newest first."""

    answers: list[AnnotatedAnswer]
    total: int = Field(description="Total number of archived answers")
