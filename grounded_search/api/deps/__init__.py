"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_html_renderer,
    get_search_service,
    get_search_session,
    get_service_cache,
)

__all__ = [
    "get_html_renderer",
    "get_search_service",
    "get_search_session",
    "get_service_cache",
]
