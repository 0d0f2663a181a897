"""Catalog service: the operations behind every user-facing command.

Wraps the matching core (TieredMatchResolver, SearchAggregator) and the
collaborators around it (entry store, remote catalog, refresh events) into
the handful of operations the CLI and HTTP API expose:

    update_catalog()   fetch remote listing -> upsert -> notify refreshed
    clear_catalog()    delete every stored entry
    lookup(name)       resolve at the configured tier, attach the page URL
    release(name)      resolve, then pick one audio clip at random
    search(keyword)    priority-merged search at the configured tier

Lookups that miss return an outcome object, never an exception; only
collaborator failures (JutsudexError subclasses) propagate.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum

import structlog

from jutsudex.config.settings import Settings
from jutsudex.interfaces.catalog_source import ICatalogSource
from jutsudex.interfaces.entry_store import IEntryStore
from jutsudex.models.entry import Entry, SearchResult
from jutsudex.pipeline.catalog_events import CatalogEvents
from jutsudex.services.match_resolver import TieredMatchResolver
from jutsudex.services.search_aggregator import SearchAggregator
from jutsudex.utils.logging import get_logger


@dataclass(frozen=True)
class EntryLookup:
    """Outcome of :meth:`CatalogService.lookup`."""

    query: str
    entry: Entry | None = None
    url: str | None = None

    @property
    def found(self) -> bool:
        return self.entry is not None


class ReleaseStatus(str, Enum):  # noqa: UP042 - StrEnum requires Python 3.11+
    FOUND = "found"
    NOT_FOUND = "not_found"
    NO_AUDIO = "no_audio"


@dataclass(frozen=True)
class ReleaseOutcome:
    """Outcome of :meth:`CatalogService.release`."""

    query: str
    status: ReleaseStatus
    entry: Entry | None = None
    audio_url: str | None = None


class CatalogService:
    """Catalog maintenance, lookup, release and search.

    Parameters
    ----------
    store:
        Entry store holding the catalog.
    source:
        Remote catalog the store is refreshed from.
    resolver:
        Tiered match resolver over *store*.
    aggregator:
        Search aggregator over *store*.
    events:
        Refresh notifications; fired after every successful ingest.
    settings:
        Supplies ``match_level`` and ``search_limit``.
    rng:
        Random source for audio clip selection (injectable for tests).
    """

    def __init__(
        self,
        store: IEntryStore,
        source: ICatalogSource,
        resolver: TieredMatchResolver,
        aggregator: SearchAggregator,
        events: CatalogEvents,
        settings: Settings,
        rng: random.Random | None = None,
    ) -> None:
        self._store = store
        self._source = source
        self._resolver = resolver
        self._aggregator = aggregator
        self._events = events
        self._settings = settings
        self._rng = rng or random.Random()
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def settings(self) -> Settings:
        return self._settings

    # ------------------------------------------------------------------
    # Catalog maintenance
    # ------------------------------------------------------------------

    async def update_catalog(self) -> int:
        """Refresh the store from the remote catalog.

        Every fetched technique is rebuilt through ``Entry.from_source`` so
        its normalized name is recomputed and its phonetic key re-blanked,
        then upserted wholesale.  Listeners (the phonetic backfill) are
        notified only after the upsert succeeded, and run in the background:
        this returns without waiting for them.  Use
        :meth:`wait_for_listeners` when the caller must see their effect.

        Returns
        -------
        int
            The total reported by the remote catalog.
        """
        jutsus, total = await self._source.fetch_all()
        entries = [Entry.from_source(j.id, j.name, j.description) for j in jutsus]
        written = await self._store.upsert(entries)

        self._logger.info(
            "catalog_updated",
            source=self._source.get_provider_name(),
            total=total,
            written=written,
        )
        await self._events.notify_refreshed()
        return total

    async def wait_for_listeners(self) -> None:
        """Wait for refresh listeners started by :meth:`update_catalog`."""
        await self._events.drain()

    async def clear_catalog(self) -> int:
        """Delete every stored entry.  Returns the number removed."""
        removed = await self._store.delete_all()
        self._logger.info("catalog_cleared", removed=removed)
        return removed

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def lookup(self, name: str) -> EntryLookup:
        """Resolve *name* at the configured match level."""
        entry = await self._resolver.resolve(name, self._settings.match_level)
        if entry is None:
            return EntryLookup(query=name)
        return EntryLookup(query=name, entry=entry, url=self._source.entry_url(entry.id))

    async def release(self, name: str) -> ReleaseOutcome:
        """Resolve *name* and pick one of its audio clips uniformly at random."""
        entry = await self._resolver.resolve(name, self._settings.match_level)
        if entry is None:
            return ReleaseOutcome(query=name, status=ReleaseStatus.NOT_FOUND)

        audios = await self._source.fetch_audio_urls(entry.id)
        if not audios:
            return ReleaseOutcome(query=name, status=ReleaseStatus.NO_AUDIO, entry=entry)

        audio_url = self._rng.choice(audios)
        self._logger.debug("audio_selected", entry_id=entry.id, clips=len(audios))
        return ReleaseOutcome(
            query=name,
            status=ReleaseStatus.FOUND,
            entry=entry,
            audio_url=audio_url,
        )

    async def search(self, keyword: str, limit: int | None = None) -> SearchResult:
        """Search at the configured match level; *limit* defaults to ``search_limit``."""
        effective_limit = self._settings.search_limit if limit is None else limit
        return await self._aggregator.search(keyword, effective_limit, self._settings.match_level)
