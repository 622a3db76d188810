"""Google GenAI boundary: search-grounded answer streaming."""

from grounded_search.boundary.genai.gemini_stream import (
    GeminiSearchStream,
    chunk_from_response,
)

__all__ = ["GeminiSearchStream", "chunk_from_response"]
