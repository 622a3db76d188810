"""
Test suite for the Gemini grounded stream adapter.

Tests response normalization with SDK look-alike objects and stream
consumption with a mocked google.genai client.

System role: Verification of the upstream stream boundary
"""

from collections.abc import AsyncIterator
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from grounded_search.boundary.genai import GeminiSearchStream, chunk_from_response
from grounded_search.configs.genai import GenAISettings
from grounded_search.core.exceptions import StreamFailureError, ValidationError
from grounded_search.models.stream import GroundingSegment, WebSource


def sdk_response(
    text: str | None = None,
    grounding_chunks: list | None = None,
    grounding_supports: list | None = None,
) -> SimpleNamespace:
    metadata = None
    if grounding_chunks is not None or grounding_supports is not None:
        metadata = SimpleNamespace(
            grounding_chunks=grounding_chunks,
            grounding_supports=grounding_supports,
        )
    return SimpleNamespace(
        text=text,
        candidates=[SimpleNamespace(grounding_metadata=metadata)],
    )


def web_chunk(uri: str | None, title: str | None = None) -> SimpleNamespace:
    return SimpleNamespace(web=SimpleNamespace(uri=uri, title=title))


def support(indices: list[int] | None, start: int | None, end: int | None) -> SimpleNamespace:
    return SimpleNamespace(
        grounding_chunk_indices=indices,
        segment=SimpleNamespace(start_index=start, end_index=end),
    )


async def replay(responses: list) -> AsyncIterator:
    for response in responses:
        yield response


def mock_client(responses: list | None = None, error: Exception | None = None) -> MagicMock:
    client = MagicMock()
    if error is not None:
        client.aio.models.generate_content_stream = AsyncMock(side_effect=error)
    else:
        client.aio.models.generate_content_stream = AsyncMock(return_value=replay(responses or []))
    return client


class TestChunkFromResponse:
    """Test suite for chunk_from_response."""

    def test_text_only_response(self) -> None:
        chunk = chunk_from_response(sdk_response(text="Hello"))

        assert chunk.text == "Hello"
        assert chunk.sources == []
        assert chunk.supports == []

    def test_grounding_metadata_is_normalized(self) -> None:
        chunk = chunk_from_response(
            sdk_response(
                text="Hi",
                grounding_chunks=[web_chunk("https://a", "A"), web_chunk("https://b")],
                grounding_supports=[support([1, 0], 3, 9)],
            )
        )

        assert chunk.sources == [
            WebSource(uri="https://a", title="A"),
            WebSource(uri="https://b", title=None),
        ]
        assert chunk.supports[0].source_indices == [1, 0]
        assert chunk.supports[0].segment == GroundingSegment(start_index=3, end_index=9)

    def test_omitted_zero_start_index_becomes_zero(self) -> None:
        chunk = chunk_from_response(
            sdk_response(grounding_chunks=[], grounding_supports=[support([0], None, 12)])
        )

        assert chunk.supports[0].segment == GroundingSegment(start_index=0, end_index=12)

    def test_missing_end_index_stays_missing(self) -> None:
        chunk = chunk_from_response(
            sdk_response(grounding_chunks=[], grounding_supports=[support([0], None, None)])
        )

        assert chunk.supports[0].segment == GroundingSegment()

    def test_non_web_grounding_chunk_keeps_its_slot(self) -> None:
        chunk = chunk_from_response(
            sdk_response(grounding_chunks=[SimpleNamespace(web=None), web_chunk("https://b")])
        )

        assert [s.uri for s in chunk.sources] == [None, "https://b"]

    def test_response_without_candidates(self) -> None:
        chunk = chunk_from_response(SimpleNamespace(text=None, candidates=None))

        assert chunk.text is None
        assert chunk.sources == []

    def test_empty_text_is_treated_as_missing(self) -> None:
        assert chunk_from_response(sdk_response(text="")).text is None


class TestGeminiSearchStream:
    """Test suite for GeminiSearchStream.stream."""

    @pytest.mark.asyncio
    async def test_stream_yields_normalized_chunks(self) -> None:
        client = mock_client([sdk_response(text="A"), sdk_response(text="B")])
        stream = GeminiSearchStream(client=client, model="gemini-test", system_instruction="Be brief")

        chunks = [chunk async for chunk in stream.stream("query")]

        assert [c.text for c in chunks] == ["A", "B"]
        kwargs = client.aio.models.generate_content_stream.call_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert kwargs["contents"][0].parts[0].text == "query"
        assert kwargs["config"].tools[0].google_search is not None

    @pytest.mark.asyncio
    async def test_request_failure_raises_stream_failure(self) -> None:
        stream = GeminiSearchStream(client=mock_client(error=RuntimeError("boom")))

        with pytest.raises(StreamFailureError, match="RuntimeError"):
            async for _ in stream.stream("query"):
                pass

    @pytest.mark.asyncio
    async def test_mid_stream_failure_raises_stream_failure(self) -> None:
        async def broken() -> AsyncIterator:
            yield sdk_response(text="partial")
            raise ConnectionError("reset")

        client = MagicMock()
        client.aio.models.generate_content_stream = AsyncMock(return_value=broken())
        stream = GeminiSearchStream(client=client)

        received = []
        with pytest.raises(StreamFailureError) as exc_info:
            async for chunk in stream.stream("query"):
                received.append(chunk)

        assert [c.text for c in received] == ["partial"]
        assert exc_info.value.details["chunks_received"] == 1


class TestGeminiSearchStreamFromSettings:
    """Test suite for GeminiSearchStream.from_settings."""

    def test_missing_api_key_raises(self) -> None:
        with pytest.raises(ValidationError):
            GeminiSearchStream.from_settings(GenAISettings(api_key=None))

    def test_settings_are_applied(self, monkeypatch: pytest.MonkeyPatch) -> None:
        fake_client = MagicMock()
        monkeypatch.setattr("google.genai.Client", MagicMock(return_value=fake_client))

        stream = GeminiSearchStream.from_settings(
            GenAISettings(api_key="key", model="gemini-custom")
        )

        assert stream.model == "gemini-custom"
