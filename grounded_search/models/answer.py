"""
Annotated answer model.

Immutable snapshot of one finished search request, archived by the session.

Dependencies: pydantic
System role: Per-request result contract
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from grounded_search.models.render import RenderPlan
from grounded_search.models.source import SourceRecord


class AnswerStatus(str, Enum):
    """Terminal status of a search request."""

    COMPLETED = "completed"
    FAILED = "failed"


class AnnotatedAnswer(BaseModel):
    """
    Finished search request.

    Failed answers never carry a plan or sources, only the fixed failure message.

    Attributes:
        request_id: Session-scoped request identifier (used for anchor names)
        query: Search query as submitted
        status: Completed or failed
        plan: Render plan of the answer text
        sources: Deduplicated sources, indexed by ordinal
        error_message: User-visible failure message for failed answers
        created_at: Archive timestamp
    """

    model_config = ConfigDict(frozen=True)

    request_id: int
    query: str
    status: AnswerStatus
    plan: RenderPlan = Field(default_factory=RenderPlan)
    sources: tuple[SourceRecord, ...] = ()
    error_message: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def text(self) -> str:
        return self.plan.text

    @classmethod
    def failed(cls, request_id: int, query: str, message: str) -> "AnnotatedAnswer":
        """Build a failed answer carrying only the failure message."""
        return cls(
            request_id=request_id,
            query=query,
            status=AnswerStatus.FAILED,
            error_message=message,
        )
