"""
Rendering planner.

Interleaves answer text with footnote groups into a linear render plan.

Dependencies: grounded_search.models, grounded_search.core.annotation.line_splitter
System role: Final assembly step of the annotated answer
"""

import logging
from collections.abc import Sequence
from operator import attrgetter

from grounded_search.core.annotation.line_splitter import split_lines
from grounded_search.models.grounding import Grounding
from grounded_search.models.render import FootnoteGroup, RenderPlan, RenderUnit

logger = logging.getLogger(__name__)


class RenderPlanner:
    """
    Builds render plans from final text and groundings.

    Groundings are anchored at the end of the span they support. Processing
    them by ascending end index with a forward-only cursor emits every
    character exactly once and places each footnote group right after the
    text it qualifies. Groundings sharing an end index keep arrival order and
    their groups are emitted back to back.
    """

    def plan(
        self,
        final_text: str,
        groundings: Sequence[Grounding],
        source_count: int,
    ) -> RenderPlan:
        """
        Produce the render plan for a finished answer.

        Args:
            final_text: Complete accumulated answer text
            groundings: Groundings in arrival order
            source_count: Number of registered sources; larger ordinals are ignored

        Returns:
            RenderPlan: Ordered text, line break and footnote units
        """
        units: list[RenderUnit] = []
        cursor = 0
        text_length = len(final_text)

        # sorted() is stable, so equal end indices keep arrival order
        for grounding in sorted(groundings, key=attrgetter("end_index")):
            end = min(grounding.end_index, text_length)
            if cursor < end:
                units.extend(split_lines(final_text[cursor:end]))
                cursor = end

            ordinals = sorted({o for o in grounding.source_ordinals if 0 <= o < source_count})
            if ordinals:
                units.append(FootnoteGroup(source_ordinals=tuple(ordinals)))

        if cursor < text_length:
            units.extend(split_lines(final_text[cursor:]))

        logger.debug(
            f"{__name__}:plan - text_len={text_length}, groundings={len(groundings)}, "
            f"units={len(units)}"
        )
        return RenderPlan(units=tuple(units))
