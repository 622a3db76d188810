"""Domain models and API schemas."""

from grounded_search.models.answer import AnnotatedAnswer, AnswerStatus
from grounded_search.models.grounding import Grounding
from grounded_search.models.render import (
    FootnoteGroup,
    LineBreak,
    RenderPlan,
    RenderUnit,
    TextSegment,
)
from grounded_search.models.source import SourceRecord
from grounded_search.models.stream import (
    GroundingSegment,
    GroundingSupport,
    StreamChunk,
    WebSource,
)

__all__ = [
    "AnnotatedAnswer",
    "AnswerStatus",
    "FootnoteGroup",
    "Grounding",
    "GroundingSegment",
    "GroundingSupport",
    "LineBreak",
    "RenderPlan",
    "RenderUnit",
    "SourceRecord",
    "StreamChunk",
    "TextSegment",
    "WebSource",
]
