"""
HTML renderer.

Renders an annotated answer as HTML: answer spans with footnote links,
followed by a numbered source list whose items are the footnote targets.

Dependencies: html, urllib.parse (stdlib), grounded_search.core.anchors, grounded_search.models
System role: HTML presentation of render plans
"""

from html import escape
from urllib.parse import urlsplit

from grounded_search.core.anchors import DEFAULT_ANCHOR_PREFIX, footnote_anchor, footnote_label
from grounded_search.models.answer import AnnotatedAnswer, AnswerStatus
from grounded_search.models.render import FootnoteGroup, LineBreak, TextSegment
from grounded_search.models.source import SourceRecord

LINKABLE_SCHEMES = frozenset({"http", "https"})


class HtmlRenderer:
    """Render annotated answers to HTML fragments."""

    def __init__(
        self,
        anchor_prefix: str = DEFAULT_ANCHOR_PREFIX,
        untitled_label: str = "Untitled",
    ) -> None:
        self.anchor_prefix = anchor_prefix
        self.untitled_label = untitled_label

    def render(self, answer: AnnotatedAnswer) -> str:
        """
        Render answer body and source list.

        Failed answers render only their failure message.
        """
        if answer.status == AnswerStatus.FAILED:
            return f'<div class="response error">{escape(answer.error_message or "")}</div>'

        body = self.render_body(answer)
        if not answer.sources:
            return body
        return body + self.render_sources(answer.request_id, answer.sources)

    def render_body(self, answer: AnnotatedAnswer) -> str:
        parts = ['<div class="response">']
        for unit in answer.plan.units:
            if isinstance(unit, TextSegment):
                parts.append(f"<span>{escape(unit.text)}</span>")
            elif isinstance(unit, LineBreak):
                parts.append("<br>")
            elif isinstance(unit, FootnoteGroup):
                parts.extend(
                    self._footnote_link(answer.request_id, ordinal)
                    for ordinal in unit.source_ordinals
                )
        parts.append("</div>")
        return "".join(parts)

    def render_sources(self, request_id: int, sources: tuple[SourceRecord, ...]) -> str:
        items = []
        for ordinal, source in enumerate(sources):
            title = escape(source.title or self.untitled_label)
            uri = escape(source.uri)
            anchor = footnote_anchor(request_id, ordinal, self.anchor_prefix)
            label = f'<span class="title">{title}</span><span class="uri">{uri}</span>'
            # Sources with other schemes (javascript:, data:) are listed as plain text
            if urlsplit(source.uri).scheme.lower() in LINKABLE_SCHEMES:
                label = (
                    f'<a href="{uri}" target="_blank" rel="noopener noreferrer" title="{title}">'
                    f"{label}</a>"
                )
            items.append(f'<li id="{anchor}">{label}</li>')
        return '<div class="sources"><h2>Sources</h2><ol>' + "".join(items) + "</ol></div>"

    def _footnote_link(self, request_id: int, ordinal: int) -> str:
        anchor = footnote_anchor(request_id, ordinal, self.anchor_prefix)
        return f'<a class="footnote-link" href="#{anchor}">{footnote_label(ordinal)}</a>'
