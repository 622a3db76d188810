"""
Render plan models.

A render plan is the ordered, presentation-neutral rendering of an annotated
answer: literal text, line breaks and footnote groups.

Dependencies: pydantic
System role: Output contract consumed by presentation renderers
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class TextSegment(BaseModel):
    """Verbatim slice of the answer text."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str


class LineBreak(BaseModel):
    """Line separator found in the answer text."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["line_break"] = "line_break"
    separator: str = "\n"


class FootnoteGroup(BaseModel):
    """Footnote markers placed right after the text they annotate."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["footnote"] = "footnote"
    source_ordinals: tuple[int, ...]

    @property
    def labels(self) -> list[int]:
        """1-based footnote labels."""
        return [ordinal + 1 for ordinal in self.source_ordinals]


RenderUnit = Annotated[
    Union[TextSegment, LineBreak, FootnoteGroup],
    Field(discriminator="kind"),
]


class RenderPlan(BaseModel):
    """Ordered sequence of render units."""

    model_config = ConfigDict(frozen=True)

    units: tuple[RenderUnit, ...] = ()

    @property
    def text(self) -> str:
        """Reconstruct the original text from text segments and line breaks."""
        parts = []
        for unit in self.units:
            if isinstance(unit, TextSegment):
                parts.append(unit.text)
            elif isinstance(unit, LineBreak):
                parts.append(unit.separator)
        return "".join(parts)

    @property
    def footnote_groups(self) -> list[FootnoteGroup]:
        return [unit for unit in self.units if isinstance(unit, FootnoteGroup)]

    def __len__(self) -> int:
        return len(self.units)
