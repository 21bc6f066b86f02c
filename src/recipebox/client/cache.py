"""Page-lifetime cache of search results."""

from __future__ import annotations

from typing import Optional, Sequence

from recipebox.models import RecipeSummary, SearchQueryDescriptor


class ResultCache:
    """Maps canonical search descriptors to the summaries they returned.

    Entries never expire and the cache is unbounded; it lives exactly as long as
    the client application that owns it.
    """

    def __init__(self) -> None:
        self._entries: dict[str, list[RecipeSummary]] = {}

    def get(self, descriptor: SearchQueryDescriptor) -> Optional[list[RecipeSummary]]:
        cached = self._entries.get(descriptor.cache_key())
        return list(cached) if cached is not None else None

    def put(self, descriptor: SearchQueryDescriptor, results: Sequence[RecipeSummary]) -> None:
        self._entries[descriptor.cache_key()] = list(results)

    def __contains__(self, descriptor: object) -> bool:
        if not isinstance(descriptor, SearchQueryDescriptor):
            return False
        return descriptor.cache_key() in self._entries

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["ResultCache"]
