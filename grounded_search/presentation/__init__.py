"""Presentation renderers consuming render plans."""

from grounded_search.presentation.html_renderer import HtmlRenderer
from grounded_search.presentation.text_renderer import TextRenderer

__all__ = ["HtmlRenderer", "TextRenderer"]
