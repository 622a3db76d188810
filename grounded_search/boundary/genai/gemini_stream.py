"""
Gemini search-grounded answer stream.

Streams answers from Gemini with the Google Search tool enabled and
normalizes every SDK response into a StreamChunk.

Dependencies: google.genai, grounded_search.models, grounded_search.configs
System role: Upstream stream adapter for the annotated text assembler
"""

import logging
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any

from google.genai import types

from grounded_search.configs.genai import GenAISettings
from grounded_search.core.exceptions import StreamFailureError, ValidationError
from grounded_search.models.stream import (
    GroundingSegment,
    GroundingSupport,
    StreamChunk,
    WebSource,
)

if TYPE_CHECKING:
    from google import genai

logger = logging.getLogger(__name__)


def _grounding_metadata(response: Any) -> Any:
    candidates = getattr(response, "candidates", None)
    if not candidates:
        return None
    return getattr(candidates[0], "grounding_metadata", None)


def _to_segment(segment: Any) -> GroundingSegment | None:
    if segment is None:
        return None
    start_index = getattr(segment, "start_index", None)
    end_index = getattr(segment, "end_index", None)
    # Zero-valued offsets are omitted on the wire
    if start_index is None and end_index is not None:
        start_index = 0
    return GroundingSegment(start_index=start_index, end_index=end_index)


def chunk_from_response(response: Any) -> StreamChunk:
    """
    Normalize one GenerateContentResponse into a StreamChunk.

    Every attribute is optional. Grounding chunks without web data keep their
    slot (uri=None) so grounding chunk indices stay aligned.

    Args:
        response: google.genai GenerateContentResponse (or look-alike)

    Returns:
        StreamChunk: Normalized chunk
    """
    text = getattr(response, "text", None)
    metadata = _grounding_metadata(response)

    sources: list[WebSource] = []
    supports: list[GroundingSupport] = []
    if metadata is not None:
        for grounding_chunk in getattr(metadata, "grounding_chunks", None) or []:
            web = getattr(grounding_chunk, "web", None)
            sources.append(
                WebSource(
                    uri=getattr(web, "uri", None),
                    title=getattr(web, "title", None),
                )
            )
        for support in getattr(metadata, "grounding_supports", None) or []:
            indices = getattr(support, "grounding_chunk_indices", None)
            supports.append(
                GroundingSupport(
                    source_indices=list(indices) if indices is not None else None,
                    segment=_to_segment(getattr(support, "segment", None)),
                )
            )

    return StreamChunk(text=text or None, sources=sources, supports=supports)


class GeminiSearchStream:
    """
    Gemini client wrapper streaming search-grounded answers.

    Any SDK or transport failure surfaces as StreamFailureError.
    """

    def __init__(
        self,
        client: "genai.Client",
        model: str = "gemini-2.5-flash",
        system_instruction: str | None = None,
    ) -> None:
        """
        Initialize stream adapter.

        Args:
            client: Google GenAI client
            model: Gemini model identifier
            system_instruction: Instruction sent with every query
        """
        self._client = client
        self._model = model
        self._system_instruction = system_instruction

    @classmethod
    def from_settings(cls, settings: GenAISettings) -> "GeminiSearchStream":
        """
        Build from GenAI settings.

        Raises:
            ValidationError: If no API key is configured
        """
        from google import genai

        if not settings.api_key:
            raise ValidationError(
                "GOOGLE_API_KEY or GEMINI_API_KEY environment variable is required",
                field="api_key",
            )
        return cls(
            client=genai.Client(api_key=settings.api_key),
            model=settings.model,
            system_instruction=settings.system_instruction,
        )

    @property
    def model(self) -> str:
        return self._model

    def build_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            tools=[types.Tool(google_search=types.GoogleSearch())],
            system_instruction=self._system_instruction,
        )

    async def stream(self, query: str) -> AsyncIterator[StreamChunk]:
        """
        Stream a grounded answer for a query.

        Args:
            query: Search key

        Yields:
            StreamChunk: One normalized chunk per upstream response

        Raises:
            StreamFailureError: If the request or the stream fails
        """
        logger.info(f"{__name__}:stream - START model={self._model}, query_len={len(query)}")
        contents = [
            types.Content(role="user", parts=[types.Part.from_text(text=query)]),
        ]

        chunk_count = 0
        try:
            responses = await self._client.aio.models.generate_content_stream(
                model=self._model,
                contents=contents,
                config=self.build_config(),
            )
            async for response in responses:
                chunk_count += 1
                yield chunk_from_response(response)
        except Exception as e:
            logger.error(
                f"{__name__}:stream - FAILED after {chunk_count} chunks - {type(e).__name__}: {e}"
            )
            raise StreamFailureError(
                f"Gemini stream failed: {type(e).__name__}: {e}",
                details={"model": self._model, "chunks_received": chunk_count},
            ) from e

        logger.info(f"{__name__}:stream - END chunks={chunk_count}")
