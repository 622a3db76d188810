"""
Grounding accumulator.

Collects grounding citations from stream chunks and remaps their raw source
indices to registry ordinals.

Dependencies: grounded_search.models, grounded_search.core.annotation.source_registry
System role: Per-request citation collection
"""

import logging
from collections.abc import Iterable

from grounded_search.core.annotation.source_registry import SourceRegistry
from grounded_search.models.grounding import Grounding
from grounded_search.models.stream import GroundingSupport, StreamChunk, WebSource

logger = logging.getLogger(__name__)


class GroundingAccumulator:
    """
    Per-stream grounding collector.

    Raw source indices in grounding supports refer to the sources received so
    far in this stream, in arrival order. The raw table keeps one slot per
    received source entry; entries without a URI keep an empty slot so later
    indices stay aligned.
    """

    def __init__(self, registry: SourceRegistry) -> None:
        """
        Initialize accumulator.

        Args:
            registry: Source registry owned by the same request
        """
        self._registry = registry
        self._raw_ordinals: list[int | None] = []
        self._groundings: list[Grounding] = []
        self.skipped_sources = 0
        self.dropped_supports = 0

    def add_chunk(self, chunk: StreamChunk) -> int:
        """
        Consume the citation data of one stream chunk.

        Sources are registered before supports so a support may reference
        sources delivered in the same chunk.

        Args:
            chunk: Normalized stream chunk

        Returns:
            int: Number of groundings added
        """
        self.register_sources(chunk.sources)
        return self.add_supports(chunk.supports)

    def register_sources(self, sources: Iterable[WebSource]) -> None:
        for source in sources:
            if not source.uri:
                self.skipped_sources += 1
                self._raw_ordinals.append(None)
                logger.debug(f"{__name__}:register_sources - Source without uri skipped")
                continue
            self._raw_ordinals.append(self._registry.resolve(source.uri, source.title))

    def add_supports(self, supports: Iterable[GroundingSupport]) -> int:
        added = 0
        for support in supports:
            grounding = self._to_grounding(support)
            if grounding is None:
                self.dropped_supports += 1
                continue
            self._groundings.append(grounding)
            added += 1
        return added

    def _to_grounding(self, support: GroundingSupport) -> Grounding | None:
        segment = support.segment
        if segment is None or support.source_indices is None:
            return None

        start_index = segment.start_index
        end_index = segment.end_index
        # Offset 0 is a real position, only None means absent
        if start_index is None or end_index is None:
            logger.debug(f"{__name__}:_to_grounding - Support without span dropped")
            return None
        if start_index < 0 or end_index < start_index:
            logger.debug(
                f"{__name__}:_to_grounding - Malformed span dropped "
                f"start={start_index}, end={end_index}"
            )
            return None

        ordinals = self.translate(support.source_indices)
        if not ordinals:
            logger.debug(f"{__name__}:_to_grounding - Support without resolvable sources dropped")
            return None

        return Grounding(
            start_index=start_index,
            end_index=end_index,
            source_ordinals=tuple(ordinals),
        )

    def translate(self, raw_indices: Iterable[int]) -> list[int]:
        """
        Map raw per-stream source indices to registry ordinals.

        Indices outside the raw table or pointing at a skipped source are dropped.
        """
        ordinals = []
        for raw_index in raw_indices:
            if 0 <= raw_index < len(self._raw_ordinals):
                ordinal = self._raw_ordinals[raw_index]
                if ordinal is not None:
                    ordinals.append(ordinal)
        return ordinals

    @property
    def groundings(self) -> tuple[Grounding, ...]:
        """Groundings in arrival order."""
        return tuple(self._groundings)

    @property
    def raw_source_count(self) -> int:
        return len(self._raw_ordinals)
