"""
Shared test fixtures and configuration for entire test suite.

Provides: fake answer streams, stream chunk builders, session and service fixtures
Dependencies: pytest
System role: Test infrastructure and fixture management
"""

import asyncio
from collections.abc import AsyncIterator, Sequence

import pytest

from grounded_search.application.services import SearchService
from grounded_search.core.exceptions import StreamFailureError
from grounded_search.core.search_session import SearchSession
from grounded_search.models.stream import (
    GroundingSegment,
    GroundingSupport,
    StreamChunk,
    WebSource,
)

FAILURE_MESSAGE = "Sorry, an error occurred while processing your request."


def make_support(
    start: int | None,
    end: int | None,
    indices: list[int] | None,
) -> GroundingSupport:
    """Build a grounding support entry."""
    return GroundingSupport(
        source_indices=indices,
        segment=GroundingSegment(start_index=start, end_index=end),
    )


def make_chunk(
    text: str | None = None,
    sources: Sequence[tuple[str | None, str | None]] = (),
    supports: Sequence[GroundingSupport] = (),
) -> StreamChunk:
    """Build a stream chunk from (uri, title) pairs and supports."""
    return StreamChunk(
        text=text,
        sources=[WebSource(uri=uri, title=title) for uri, title in sources],
        supports=list(supports),
    )


class FakeAnswerStream:
    """Answer stream replaying scripted chunks, optionally failing midway."""

    def __init__(
        self,
        chunks: Sequence[StreamChunk] = (),
        fail_after: int | None = None,
    ) -> None:
        self.chunks = list(chunks)
        self.fail_after = fail_after
        self.queries: list[str] = []

    async def stream(self, query: str) -> AsyncIterator[StreamChunk]:
        self.queries.append(query)
        for index, chunk in enumerate(self.chunks):
            if self.fail_after is not None and index >= self.fail_after:
                raise StreamFailureError("upstream exploded")
            yield chunk
        if self.fail_after is not None and self.fail_after >= len(self.chunks):
            raise StreamFailureError("upstream exploded")


class GatedAnswerStream(FakeAnswerStream):
    """Answer stream that holds its chunks back until the gate is opened."""

    def __init__(self, chunks: Sequence[StreamChunk] = ()) -> None:
        super().__init__(chunks)
        self.started = asyncio.Event()
        self.gate = asyncio.Event()

    async def stream(self, query: str) -> AsyncIterator[StreamChunk]:
        self.queries.append(query)
        self.started.set()
        await self.gate.wait()
        for chunk in self.chunks:
            yield chunk


@pytest.fixture
def grounded_chunks() -> list[StreamChunk]:
    """Chunks of a typical grounded answer: text first, citations last."""
    return [
        make_chunk(text="Paris is the capital of France. "),
        make_chunk(text="It has 2.1 million residents."),
        make_chunk(
            sources=[
                ("https://example.org/paris", "Paris"),
                ("https://example.org/census", "Census"),
                ("https://example.org/paris", "Paris again"),
            ],
            supports=[
                make_support(0, 31, [0]),
                make_support(32, 61, [1, 2]),
            ],
        ),
    ]


@pytest.fixture
def search_session() -> SearchSession:
    """Provide an empty search session."""
    return SearchSession(history_limit=10)


@pytest.fixture
def fake_stream(grounded_chunks: list[StreamChunk]) -> FakeAnswerStream:
    """Provide a fake answer stream replaying the grounded chunks."""
    return FakeAnswerStream(grounded_chunks)


@pytest.fixture
def search_service(fake_stream: FakeAnswerStream, search_session: SearchSession) -> SearchService:
    """Provide SearchService wired to the fake stream."""
    return SearchService(
        answer_stream=fake_stream,
        session=search_session,
        failure_message=FAILURE_MESSAGE,
    )
