"""Tiered match resolver: free-text name -> single catalog entry.

Walks the match tiers from ``STRICT`` up to a caller-chosen maximum and
returns the first row of the first tier whose exact-match query finds
anything.  A stricter hit always wins; looser tiers are never consulted
once a tier has matched.

A miss at every tier returns ``None``.  That is an ordinary outcome (the
caller may fall back to a search), not an exception.  Store failures are
not caught here: one failing tier aborts the whole resolution.
"""

from __future__ import annotations

import structlog

from jutsudex.interfaces.entry_store import IEntryStore
from jutsudex.interfaces.phonetic_provider import IPhoneticProvider, phonetic_available
from jutsudex.models.entry import Entry, EntryField, MatchTier
from jutsudex.services.tier_strategy import strategies_up_to
from jutsudex.utils.logging import get_logger


class TieredMatchResolver:
    """Single-result, first-hit-wins resolution across match tiers.

    Usage::

        resolver = TieredMatchResolver(store, phonetic=PinyinPhoneticProvider())
        entry = await resolver.resolve("Fire Style!", MatchTier.NORMAL)
        if entry is None:
            ...  # not found at any permitted tier

    Parameters
    ----------
    store:
        Entry store answering ``find_exact`` queries.
    phonetic:
        Optional phonetic provider.  ``None`` or an unavailable provider
        makes ``HOMOPHONE`` behave like ``NORMAL``.
    """

    def __init__(
        self,
        store: IEntryStore,
        phonetic: IPhoneticProvider | None = None,
    ) -> None:
        self._store = store
        self._phonetic = phonetic
        self._logger: structlog.BoundLogger = get_logger(__name__)

    async def resolve(self, query: str, max_tier: MatchTier) -> Entry | None:
        """Resolve *query* to one entry, or ``None`` if no tier matches.

        Parameters
        ----------
        query:
            Raw user text, untransformed.
        max_tier:
            Loosest tier to try.  ``STRICT`` tries only exact display-name
            equality.
        """
        available = phonetic_available(self._phonetic)
        phoneticize = self._phonetic.phoneticize if available else None

        for strategy in strategies_up_to(max_tier, available, phoneticize):
            key = strategy.key_for(query)
            if not key and strategy.field is EntryField.PHONETIC_NAME:
                # An empty phonetic key marks rows not yet backfilled.
                self._logger.debug("tier_skipped", query=query, tier=strategy.tier.name)
                continue
            rows = await self._store.find_exact(strategy.field, key)
            if rows:
                self._logger.debug(
                    "tier_hit",
                    query=query,
                    tier=strategy.tier.name,
                    field=strategy.field.value,
                    entry_id=rows[0].id,
                    candidates=len(rows),
                )
                return rows[0]

        self._logger.debug(
            "resolve_miss",
            query=query,
            max_tier=max_tier.name,
            phonetic_available=available,
        )
        return None
