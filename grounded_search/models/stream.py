"""
Upstream stream protocol models.

Normalized shape of one chunk of a search-grounded answer stream.
Every field is optional: a missing field means "no data in this chunk".

Dependencies: pydantic
System role: Boundary contract between the generation backend and the assembler
"""

from pydantic import BaseModel, Field


class WebSource(BaseModel):
    """Citation source entry as delivered by the upstream."""

    uri: str | None = None
    title: str | None = None


class GroundingSegment(BaseModel):
    """Span of the final text covered by a grounding support."""

    start_index: int | None = None
    end_index: int | None = None


class GroundingSupport(BaseModel):
    """Grounding support entry referencing raw source indices."""

    source_indices: list[int] | None = None
    segment: GroundingSegment | None = None


class StreamChunk(BaseModel):
    """
    One incrementally delivered unit of the answer stream.

    Attributes:
        text: Incremental text fragment
        sources: Citation source entries, appended to the per-stream raw table
        supports: Grounding supports whose indices point into that table
    """

    text: str | None = None
    sources: list[WebSource] = Field(default_factory=list)
    supports: list[GroundingSupport] = Field(default_factory=list)
