"""
Streaming annotated text assembly.

Merges an incrementally arriving text stream with grounding citation metadata
into a footnote-annotated render plan and a deduplicated source list.
"""

from grounded_search.core.annotation.assembler import AssembledDocument, StreamAssembler
from grounded_search.core.annotation.grounding_accumulator import GroundingAccumulator
from grounded_search.core.annotation.line_splitter import split_lines
from grounded_search.core.annotation.render_planner import RenderPlanner
from grounded_search.core.annotation.source_registry import SourceRegistry
from grounded_search.core.annotation.text_accumulator import TextAccumulator

__all__ = [
    "AssembledDocument",
    "GroundingAccumulator",
    "RenderPlanner",
    "SourceRegistry",
    "StreamAssembler",
    "TextAccumulator",
    "split_lines",
]
