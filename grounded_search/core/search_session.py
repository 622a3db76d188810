"""
Search session state.

Owns the request id counter, the active-request guard and the archive of
finished answers. Per-request assembly state never lives here; each request
gets a fresh assembler and only its immutable snapshot is archived.

Dependencies: grounded_search.models, grounded_search.core.exceptions
System role: Request sequencing and history for one search session
"""

import logging
from dataclasses import dataclass

from grounded_search.core.exceptions import (
    RequestInProgressError,
    RequestNotFoundError,
    ValidationError,
)
from grounded_search.models.answer import AnnotatedAnswer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestContext:
    """Identity of an in-flight request."""

    request_id: int
    query: str


class SearchSession:
    """Sequenced search requests and their archived answers (newest first)."""

    def __init__(self, history_limit: int = 50) -> None:
        """
        Initialize session.

        Args:
            history_limit: Maximum number of archived answers kept
        """
        self._history_limit = history_limit
        self._next_request_id = 1
        self._active: RequestContext | None = None
        self._history: list[AnnotatedAnswer] = []

    def begin_request(self, query: str) -> RequestContext:
        """
        Start a new request.

        Returns:
            RequestContext: New request with the next request id

        Raises:
            RequestInProgressError: If the previous request was not archived or abandoned
        """
        if self._active is not None:
            raise RequestInProgressError(self._active.request_id)

        context = RequestContext(request_id=self._next_request_id, query=query)
        self._next_request_id += 1
        self._active = context
        logger.info(f"{__name__}:begin_request - request_id={context.request_id}")
        return context

    def archive(self, answer: AnnotatedAnswer) -> None:
        """
        Close the active request and store its snapshot.

        Raises:
            ValidationError: If the answer does not belong to the active request
        """
        if self._active is None or self._active.request_id != answer.request_id:
            raise ValidationError(
                "Answer does not belong to the active request",
                field="request_id",
                details={"request_id": answer.request_id},
            )

        self._active = None
        self._history.insert(0, answer)
        del self._history[self._history_limit:]
        logger.info(
            f"{__name__}:archive - request_id={answer.request_id}, status={answer.status.value}, "
            f"history_size={len(self._history)}"
        )

    def abandon(self, context: RequestContext) -> None:
        """Release the active request without archiving anything."""
        if self._active == context:
            self._active = None
            logger.warning(f"{__name__}:abandon - request_id={context.request_id}")

    def clear(self) -> None:
        """
        Drop archived answers. Request ids keep increasing.

        An in-flight request stays active and is archived when it finishes.
        """
        self._history.clear()
        logger.info(f"{__name__}:clear - active_request={self._active is not None}")

    def get(self, request_id: int) -> AnnotatedAnswer:
        for answer in self._history:
            if answer.request_id == request_id:
                return answer
        raise RequestNotFoundError(request_id)

    @property
    def history(self) -> list[AnnotatedAnswer]:
        return list(self._history)

    @property
    def active_request(self) -> RequestContext | None:
        return self._active
