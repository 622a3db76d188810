"""
Search service for grounded answers.

Orchestrates one search request at a time: begins the request on the session,
consumes the upstream stream into a fresh assembler, builds the render plan
and archives the immutable answer. A failing stream yields a failed answer
carrying only the fixed failure message, never a partial plan.

Dependencies: grounded_search.core, grounded_search.boundary.genai, grounded_search.models
System role: Search orchestration layer
"""

import asyncio
import logging
from collections.abc import AsyncGenerator, AsyncIterator
from typing import Protocol

from grounded_search.core.annotation import StreamAssembler
from grounded_search.core.exceptions import RequestInProgressError, ValidationError
from grounded_search.core.search_session import RequestContext, SearchSession
from grounded_search.models.answer import AnnotatedAnswer, AnswerStatus
from grounded_search.models.stream import StreamChunk
from grounded_search.models.streaming import StreamEvent, StreamEventType

logger = logging.getLogger(__name__)

DEFAULT_FAILURE_MESSAGE = "Sorry, an error occurred while processing your request."
TERMINAL_EVENTS = (StreamEventType.COMPLETE, StreamEventType.ERROR)


class AnswerStream(Protocol):
    """Source of normalized stream chunks for a query."""

    def stream(self, query: str) -> AsyncIterator[StreamChunk]: ...


class SearchService:
    """
    Search service for grounded Q&A.

    One request runs at a time per service; a request arriving while another
    holds the lock is rejected with RequestInProgressError. Each request gets
    its own assembler so no mutable state is shared between requests.
    """

    def __init__(
        self,
        answer_stream: AnswerStream,
        session: SearchSession,
        failure_message: str = DEFAULT_FAILURE_MESSAGE,
        segment_offsets_in_bytes: bool = False,
    ) -> None:
        """
        Initialize search service.

        Args:
            answer_stream: Upstream stream adapter (e.g. GeminiSearchStream)
            session: Session owning request ids and history
            failure_message: Fixed user-visible message for failed requests
            segment_offsets_in_bytes: Grounding offsets are UTF-8 byte offsets
        """
        self.answer_stream = answer_stream
        self.session = session
        self.failure_message = failure_message
        self._segment_offsets_in_bytes = segment_offsets_in_bytes
        self._lock = asyncio.Lock()

    async def search(self, query: str) -> AnnotatedAnswer:
        """
        Run a search and return its archived answer.

        Args:
            query: Search key

        Returns:
            AnnotatedAnswer: Completed answer, or failed answer with the failure message

        Raises:
            ValidationError: If the query is empty
            RequestInProgressError: If another search on this service is still running
        """
        request_id: int | None = None
        # Drain the stream fully so the session lock is released before returning
        async for event in self.stream_search(query):
            if event.event in TERMINAL_EVENTS:
                request_id = event.data["request_id"]
        return self.session.get(request_id)

    async def stream_search(self, query: str) -> AsyncGenerator[StreamEvent, None]:
        """
        Run a search, streaming progress events.

        Yields:
            StreamEvent: started, token events, then exactly one complete or error event

        Raises:
            ValidationError: If the query is empty
            RequestInProgressError: If another search on this service is still running
        """
        query = self._validate_query(query)

        if self._lock.locked():
            active = self.session.active_request
            raise RequestInProgressError(active.request_id if active else 0)

        async with self._lock:
            context = self.session.begin_request(query)
            logger.info(
                f"{__name__}:stream_search - START request_id={context.request_id}, "
                f"query_len={len(query)}"
            )
            try:
                yield StreamEvent(
                    event=StreamEventType.STARTED,
                    data={"request_id": context.request_id, "query": query},
                )

                assembler = StreamAssembler(segment_offsets_in_bytes=self._segment_offsets_in_bytes)
                upstream = aiter(self.answer_stream.stream(query))
                token_index = 0
                while True:
                    try:
                        chunk = await anext(upstream)
                    except StopAsyncIteration:
                        break
                    except Exception as e:
                        # Any upstream failure is terminal for the whole request
                        answer = self._fail(context, e)
                        yield StreamEvent(
                            event=StreamEventType.ERROR,
                            data={
                                "request_id": context.request_id,
                                "code": "STREAM_FAILED",
                                "message": answer.error_message,
                            },
                        )
                        return

                    fragment = assembler.ingest(chunk)
                    if fragment:
                        yield StreamEvent(
                            event=StreamEventType.TOKEN,
                            data={
                                "request_id": context.request_id,
                                "token": fragment,
                                "index": token_index,
                            },
                        )
                        token_index += 1

                document = assembler.finalize()
                answer = AnnotatedAnswer(
                    request_id=context.request_id,
                    query=query,
                    status=AnswerStatus.COMPLETED,
                    plan=document.plan,
                    sources=document.sources,
                )
                self.session.archive(answer)
                logger.info(
                    f"{__name__}:stream_search - END request_id={context.request_id}, "
                    f"units={len(answer.plan)}, sources={len(answer.sources)}"
                )
                yield StreamEvent(
                    event=StreamEventType.COMPLETE,
                    data={
                        "request_id": context.request_id,
                        "answer": answer.model_dump(mode="json"),
                    },
                )
            finally:
                # Cancelled or unexpected failure: release without archiving a partial answer
                self.session.abandon(context)

    def _fail(self, context: RequestContext, error: Exception) -> AnnotatedAnswer:
        logger.error(
            f"{__name__}:stream_search - FAILED request_id={context.request_id} - "
            f"{type(error).__name__}: {error}"
        )
        answer = AnnotatedAnswer.failed(
            request_id=context.request_id,
            query=context.query,
            message=self.failure_message,
        )
        self.session.archive(answer)
        return answer

    @staticmethod
    def _validate_query(query: str) -> str:
        if query is None or not query.strip():
            raise ValidationError("Query must not be empty", field="query")
        return query.strip()
