"""
Source registry.

Deduplicates citation sources by URI and assigns each a stable ordinal.

Dependencies: grounded_search.models
System role: Per-request source deduplication
"""

from grounded_search.models.source import SourceRecord


class SourceRegistry:
    """
    Append-only mapping from source URI to ordinal.

    The Nth distinct URI gets ordinal N (0-based). A URI seen again resolves to
    its original ordinal and keeps its first-seen title.
    """

    def __init__(self) -> None:
        self._ordinals: dict[str, int] = {}
        self._records: list[SourceRecord] = []

    def resolve(self, uri: str, title: str | None = None) -> int:
        """
        Resolve a source to its ordinal, registering it on first sighting.

        Args:
            uri: Source URI (identity key)
            title: Source title, ignored if the URI is already registered

        Returns:
            int: Stable ordinal of the source
        """
        ordinal = self._ordinals.get(uri)
        if ordinal is not None:
            return ordinal

        ordinal = len(self._records)
        self._records.append(SourceRecord(uri=uri, title=title))
        self._ordinals[uri] = ordinal
        return ordinal

    def get(self, ordinal: int) -> SourceRecord:
        return self._records[ordinal]

    @property
    def records(self) -> tuple[SourceRecord, ...]:
        """Registered sources, indexed by ordinal."""
        return tuple(self._records)

    @property
    def count(self) -> int:
        return len(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, uri: object) -> bool:
        return uri in self._ordinals
