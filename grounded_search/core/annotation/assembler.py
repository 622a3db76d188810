"""
Stream assembler.

Owns the mutable state of one request: source registry, grounding
accumulator and text accumulator. Consumes stream chunks and produces the
finished render plan once the stream ends.

Dependencies: grounded_search.core.annotation, grounded_search.models
System role: Per-request streaming annotated text assembly
"""

import logging
from dataclasses import dataclass

from grounded_search.core.annotation.grounding_accumulator import GroundingAccumulator
from grounded_search.core.annotation.render_planner import RenderPlanner
from grounded_search.core.annotation.source_registry import SourceRegistry
from grounded_search.core.annotation.text_accumulator import TextAccumulator
from grounded_search.core.exceptions import AssemblerClosedError
from grounded_search.models.grounding import Grounding
from grounded_search.models.render import RenderPlan
from grounded_search.models.source import SourceRecord
from grounded_search.models.stream import StreamChunk

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssembledDocument:
    """Final state of one assembled answer."""

    plan: RenderPlan
    sources: tuple[SourceRecord, ...]
    groundings: tuple[Grounding, ...]

    @property
    def text(self) -> str:
        return self.plan.text


class StreamAssembler:
    """Streaming annotated text assembler for a single request."""

    def __init__(
        self,
        planner: RenderPlanner | None = None,
        segment_offsets_in_bytes: bool = False,
    ) -> None:
        """
        Initialize assembler.

        Args:
            planner: Render planner (default instance if None)
            segment_offsets_in_bytes: Grounding offsets are UTF-8 byte offsets
        """
        self.registry = SourceRegistry()
        self.groundings = GroundingAccumulator(self.registry)
        self.text = TextAccumulator()
        self._planner = planner or RenderPlanner()
        self._segment_offsets_in_bytes = segment_offsets_in_bytes
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def ingest(self, chunk: StreamChunk) -> str:
        """
        Consume one stream chunk.

        Args:
            chunk: Normalized stream chunk

        Returns:
            str: Text fragment carried by the chunk ("" if none)

        Raises:
            AssemblerClosedError: If the assembler was already finalized
        """
        if self._closed:
            raise AssemblerClosedError("Assembler already finalized")

        fragment = chunk.text or ""
        self.text.append(fragment)
        self.groundings.add_chunk(chunk)
        return fragment

    def finalize(self) -> AssembledDocument:
        """
        Close the assembler and build the render plan.

        Returns:
            AssembledDocument: Plan, deduplicated sources and groundings
        """
        self._closed = True
        final_text = self.text.text
        groundings = self.groundings.groundings
        if self._segment_offsets_in_bytes:
            groundings = tuple(self._to_char_offsets(g) for g in groundings)

        plan = self._planner.plan(final_text, groundings, self.registry.count)
        logger.info(
            f"{__name__}:finalize - text_len={len(final_text)}, sources={self.registry.count}, "
            f"groundings={len(groundings)}, dropped_supports={self.groundings.dropped_supports}, "
            f"skipped_sources={self.groundings.skipped_sources}"
        )
        return AssembledDocument(
            plan=plan,
            sources=self.registry.records,
            groundings=groundings,
        )

    def _to_char_offsets(self, grounding: Grounding) -> Grounding:
        return grounding.model_copy(
            update={
                "start_index": self.text.char_offset(grounding.start_index),
                "end_index": self.text.char_offset(grounding.end_index),
            }
        )
