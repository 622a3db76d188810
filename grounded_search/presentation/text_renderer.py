"""
Plain text renderer.

Renders an annotated answer for terminals and logs: inline "[n]" markers and
a numbered "Sources:" list.

Dependencies: grounded_search.core.anchors, grounded_search.models
System role: Text presentation of render plans
"""

from grounded_search.core.anchors import footnote_label, footnote_number
from grounded_search.models.answer import AnnotatedAnswer, AnswerStatus
from grounded_search.models.render import FootnoteGroup, LineBreak, TextSegment


class TextRenderer:
    """Render annotated answers to plain text."""

    def __init__(self, untitled_label: str = "Untitled") -> None:
        self.untitled_label = untitled_label

    def render(self, answer: AnnotatedAnswer) -> str:
        if answer.status == AnswerStatus.FAILED:
            return answer.error_message or ""

        parts: list[str] = []
        for unit in answer.plan.units:
            if isinstance(unit, TextSegment):
                parts.append(unit.text)
            elif isinstance(unit, LineBreak):
                parts.append("\n")
            elif isinstance(unit, FootnoteGroup):
                parts.extend(footnote_label(ordinal) for ordinal in unit.source_ordinals)
        body = "".join(parts)

        if not answer.sources:
            return body

        lines = [body, "", "Sources:"]
        for ordinal, source in enumerate(answer.sources):
            lines.append(
                f"{footnote_number(ordinal)}. {source.title or self.untitled_label} - {source.uri}"
            )
        return "\n".join(lines)
