"""Search API endpoints.

Routes:
- POST /search - Run a grounded search and return the annotated answer
- POST /search/stream - Stream a grounded search using Server-Sent Events (SSE)
- GET /search/history - List archived answers, newest first
- GET /search/history/{request_id} - Get one archived answer
- DELETE /search/history - Clear archived answers

Dependencies: grounded_search.application.services.search_service
System role: Search HTTP API with streaming support
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from grounded_search.api.deps import (
    get_html_renderer,
    get_search_service,
    get_search_session,
)
from grounded_search.application.services import SearchService
from grounded_search.core.exceptions import (
    RequestInProgressError,
    RequestNotFoundError,
    ValidationError,
)
from grounded_search.core.search_session import SearchSession
from grounded_search.models.answer import AnnotatedAnswer
from grounded_search.models.search import (
    SearchHistoryResponse,
    SearchRequest,
    SearchResponse,
)
from grounded_search.models.streaming import StreamEvent, StreamEventType
from grounded_search.presentation import HtmlRenderer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])


@router.post("", response_model=SearchResponse)
async def search(
    request: SearchRequest,
    search_service: SearchService = Depends(get_search_service),
    renderer: HtmlRenderer = Depends(get_html_renderer),
) -> SearchResponse:
    """Run a grounded search.

    Failed upstream streams are not HTTP errors: the answer comes back with
    status "failed" and the fixed failure message.

    Raises:
        HTTPException(422): Empty query
        HTTPException(409): Another request is still in progress
    """
    try:
        answer = await search_service.search(request.query)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.message)
    except RequestInProgressError as e:
        raise HTTPException(status_code=409, detail=e.message)

    return SearchResponse(answer=answer, html=renderer.render(answer))


@router.post("/stream")
async def search_stream(
    request: SearchRequest,
    search_service: SearchService = Depends(get_search_service),
) -> StreamingResponse:
    """Stream a grounded search using Server-Sent Events (SSE).

    SSE Format:
        event: started
        data: {"request_id": 1, "query": "..."}

        event: token
        data: {"request_id": 1, "token": "...", "index": 0}

        event: complete
        data: {"request_id": 1, "answer": {...}}

        event: error
        data: {"code": "...", "message": "..."}
    """
    logger.info(f"{__name__}:search_stream - START query_len={len(request.query)}")

    async def event_generator() -> AsyncGenerator[str, None]:
        """Generate SSE frames from the search stream."""
        try:
            async for event in search_service.stream_search(request.query):
                yield event.to_sse()
            logger.info(f"{__name__}:search_stream - Stream completed")
        except ValidationError as e:
            logger.warning(f"{__name__}:search_stream - ValidationError: {e}")
            yield StreamEvent(
                event=StreamEventType.ERROR,
                data={"code": "INVALID_QUERY", "message": e.message},
            ).to_sse()
        except RequestInProgressError as e:
            logger.warning(f"{__name__}:search_stream - RequestInProgressError: {e}")
            yield StreamEvent(
                event=StreamEventType.ERROR,
                data={"code": "REQUEST_IN_PROGRESS", "message": e.message},
            ).to_sse()

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",  # Disable nginx buffering
        },
    )


@router.get("/history", response_model=SearchHistoryResponse)
async def get_history(
    session: SearchSession = Depends(get_search_session),
) -> SearchHistoryResponse:
    """List archived answers, newest first."""
    answers = session.history
    return SearchHistoryResponse(answers=answers, total=len(answers))


@router.get("/history/{request_id}", response_model=AnnotatedAnswer)
async def get_history_item(
    request_id: int,
    session: SearchSession = Depends(get_search_session),
) -> AnnotatedAnswer:
    """Get one archived answer.

    Raises:
        HTTPException(404): No archived answer with this request id
    """
    try:
        return session.get(request_id)
    except RequestNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.delete("/history", status_code=204)
async def clear_history(
    session: SearchSession = Depends(get_search_session),
) -> None:
    """Clear archived answers."""
    session.clear()
