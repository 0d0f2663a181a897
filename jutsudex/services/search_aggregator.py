"""Priority-merged search across match tiers.

For every tier from ``STRICT`` up to the configured maximum, the keyword is
transformed with that tier's strategy and the store is asked for rows whose
indexed field *contains* the key.  The per-tier hits are merged into one
ordered, duplicate-free list:

    STRICT bucket      [ids first seen at STRICT,    in store order]
  + NORMAL bucket      [ids first seen at NORMAL,    in store order]
  + HOMOPHONE bucket   [ids first seen at HOMOPHONE, in store order]

An ``id`` already placed by a stricter tier is skipped by every looser
tier: it keeps the stricter tier's record and position.

# ─── THE TWO LIMITS ───────────────────────────────────────────────────
#
# ``limit`` is applied twice, on purpose:
#
#   1. Each tier's store query is capped at ``limit`` rows.  With three
#      tiers up to 3 x limit rows are fetched before deduplication.  A
#      single global cap could let a flood of loose matches crowd out
#      stricter ones that the store returns later.
#   2. The merged list is cut to ``limit`` entries for display, while
#      ``total_count`` keeps the size of the whole merged list so callers
#      can say "N results" even when fewer are shown.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import structlog

from jutsudex.interfaces.entry_store import IEntryStore
from jutsudex.interfaces.phonetic_provider import IPhoneticProvider, phonetic_available
from jutsudex.models.entry import Entry, EntryField, MatchTier, SearchResult
from jutsudex.services.tier_strategy import strategies_up_to
from jutsudex.utils.logging import get_logger


class SearchAggregator:
    """Multi-tier substring search with tier-priority deduplication.

    Parameters
    ----------
    store:
        Entry store answering ``find_substring`` queries.
    phonetic:
        Optional phonetic provider; unavailable means ``HOMOPHONE``
        searches the ``NORMAL`` field again.
    """

    def __init__(
        self,
        store: IEntryStore,
        phonetic: IPhoneticProvider | None = None,
    ) -> None:
        self._store = store
        self._phonetic = phonetic
        self._logger: structlog.BoundLogger = get_logger(__name__)

    async def search(self, keyword: str, limit: int, max_tier: MatchTier) -> SearchResult:
        """Search every permitted tier and merge the hits.

        Parameters
        ----------
        keyword:
            Raw user text, untransformed.
        limit:
            Per-tier query cap and display cap (must be >= 1).
        max_tier:
            Loosest tier to search.

        Returns
        -------
        SearchResult
            Up to *limit* entries in merged order, plus the distinct total.

        Raises
        ------
        ValueError
            If *limit* is less than 1.
        """
        if limit < 1:
            msg = f"Search limit must be at least 1, got {limit}"
            raise ValueError(msg)

        available = phonetic_available(self._phonetic)
        phoneticize = self._phonetic.phoneticize if available else None

        buckets: list[list[Entry]] = []
        seen: set[int] = set()

        for strategy in strategies_up_to(max_tier, available, phoneticize):
            key = strategy.key_for(keyword)
            if not key and strategy.field is EntryField.PHONETIC_NAME:
                # An empty phonetic key would match every row.
                self._logger.debug("tier_skipped", keyword=keyword, tier=strategy.tier.name)
                continue
            rows = await self._store.find_substring(strategy.field, key, limit)

            bucket: list[Entry] = []
            for entry in rows:
                if entry.id in seen:
                    continue
                seen.add(entry.id)
                bucket.append(entry)
            buckets.append(bucket)

            self._logger.debug(
                "tier_searched",
                keyword=keyword,
                tier=strategy.tier.name,
                fetched=len(rows),
                new=len(bucket),
            )

        merged = [entry for bucket in buckets for entry in bucket]

        self._logger.info(
            "search_merged",
            keyword=keyword,
            max_tier=max_tier.name,
            total=len(merged),
            shown=min(limit, len(merged)),
        )
        return SearchResult(entries=merged[:limit], total_count=len(merged))
