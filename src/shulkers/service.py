"""Search both catalogs and resolve a plugin name.

:class:`PluginFinder` queries the selected catalogs concurrently, merges
whatever succeeded and hands the merged list to the resolver. A catalog
that fails only drops its own results.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from .cache import TTLCache
from .config import Settings
from .fuzzy import GOOD_MATCH_THRESHOLD
from .merger import merge, normalize
from .models import CatalogRecord, Source
from .resolver import DisambiguationOutcome, resolve
from .sources import CatalogError, ModrinthClient, SpigotClient

logger = logging.getLogger(__name__)


@dataclass
class SearchResults:
    """Merged records plus per-catalog bookkeeping."""
    records: List[CatalogRecord] = field(default_factory=list)
    counts: Dict[Source, int] = field(default_factory=dict)
    errors: Dict[Source, str] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.records)


class PluginFinder:
    """Entry point for plugin searches across catalogs."""

    def __init__(self, spigot: SpigotClient, modrinth: ModrinthClient, fetch_versions: bool = True):
        self.spigot = spigot
        self.modrinth = modrinth
        self.fetch_versions = fetch_versions

    @classmethod
    def from_settings(cls, settings: Settings, cache: Optional[TTLCache] = None) -> "PluginFinder":
        """Build both clients on one shared cache."""
        cache = cache if cache is not None else TTLCache(ttl_s=settings.cache_ttl_s)
        return cls(
            spigot=SpigotClient(settings.spigot_url, cache=cache, timeout_s=settings.timeout_s),
            modrinth=ModrinthClient(settings.modrinth_url, cache=cache, timeout_s=settings.timeout_s),
        )

    def _searches(self, query: str, limit: int, source: Optional[Source]) -> Dict[Source, Callable[[], Any]]:
        searches: Dict[Source, Callable[[], Any]] = {}
        if source in (None, Source.SPIGOT):
            searches[Source.SPIGOT] = lambda: self.spigot.search(query, limit)
        if source in (None, Source.MODRINTH):
            searches[Source.MODRINTH] = lambda: self.modrinth.search(query, limit, self.fetch_versions)
        return searches

    def search(self, query: str, limit: int = 10, source: Optional[Source] = None) -> SearchResults:
        """Search the selected catalogs (both when ``source`` is None).

        Both calls run concurrently and are joined before merging. Failures
        are logged and recorded in ``errors``; they never propagate.
        """
        searches = self._searches(query, limit, source)
        raw: Dict[Source, list] = {s: [] for s in searches}
        results = SearchResults()

        with ThreadPoolExecutor(max_workers=len(searches)) as pool:
            futures = {s: pool.submit(fn) for s, fn in searches.items()}
            for catalog, future in futures.items():
                try:
                    raw[catalog] = future.result() or []
                except CatalogError as e:
                    logger.warning("Error searching %s: %s", catalog.value, e)
                    results.errors[catalog] = str(e)
                except Exception as e:
                    logger.warning("Unexpected error searching %s: %s", catalog.value, e, exc_info=True)
                    results.errors[catalog] = str(e)
                results.counts[catalog] = len(raw[catalog])

        results.records = merge(raw.get(Source.SPIGOT), raw.get(Source.MODRINTH))
        return results

    def find(
        self,
        query: str,
        limit: int = 5,
        source: Optional[Source] = None,
        threshold: float = GOOD_MATCH_THRESHOLD,
    ) -> Tuple[DisambiguationOutcome, SearchResults]:
        """Search and resolve ``query`` to one plugin or a choice set."""
        results = self.search(query, limit, source)
        return resolve(query, results.records, threshold), results

    def lookup(self, plugin_id: str, source: Source) -> Optional[CatalogRecord]:
        """Fetch one plugin by its catalog-native ID.

        Raises CatalogError on transport failure; returns None if the
        catalog has no such plugin.
        """
        if source is Source.SPIGOT:
            raw = self.spigot.get_resource(int(plugin_id))
        else:
            raw = self.modrinth.get_project(plugin_id)
        if raw is None:
            return None
        return normalize(raw, source)
