"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: grounded_search.configs, grounded_search.application, grounded_search.boundary
System role: DI container for service injection
"""

from grounded_search.application.services import SearchService
from grounded_search.configs import get_settings
from grounded_search.core.search_session import SearchSession
from grounded_search.presentation import HtmlRenderer


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self) -> None:
        self._session = None
        self._answer_stream = None
        self._search_service = None
        self._html_renderer = None

    @property
    def session(self) -> SearchSession:
        """Get cached search session."""
        if self._session is None:
            settings = get_settings()
            self._session = SearchSession(history_limit=settings.search.history_limit)
        return self._session

    @property
    def answer_stream(self):
        """Get cached Gemini answer stream."""
        if self._answer_stream is None:
            from grounded_search.boundary.genai import GeminiSearchStream

            self._answer_stream = GeminiSearchStream.from_settings(get_settings().genai)
        return self._answer_stream

    @property
    def search_service(self) -> SearchService:
        """Get cached search service."""
        if self._search_service is None:
            settings = get_settings()
            self._search_service = SearchService(
                answer_stream=self.answer_stream,
                session=self.session,
                failure_message=settings.rendering.failure_message,
                segment_offsets_in_bytes=settings.rendering.segment_offsets_in_bytes,
            )
        return self._search_service

    @property
    def html_renderer(self) -> HtmlRenderer:
        """Get cached HTML renderer."""
        if self._html_renderer is None:
            settings = get_settings()
            self._html_renderer = HtmlRenderer(
                anchor_prefix=settings.rendering.anchor_prefix,
                untitled_label=settings.rendering.untitled_label,
            )
        return self._html_renderer

    def clear(self) -> None:
        """Clear all cached instances."""
        self._session = None
        self._answer_stream = None
        self._search_service = None
        self._html_renderer = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_search_service() -> SearchService:
    """
    Get search service instance.

    Returns:
        SearchService: Search service bound to the shared session and Gemini stream
    """
    return get_service_cache().search_service


def get_search_session() -> SearchSession:
    """Get the shared search session."""
    return get_service_cache().session


def get_html_renderer() -> HtmlRenderer:
    """Get the shared HTML renderer."""
    return get_service_cache().html_renderer
