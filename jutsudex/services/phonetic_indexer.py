"""Phonetic index maintainer: keeps ``phonetic_name`` populated.

Newly ingested entries carry an empty ``phonetic_name``.  The backfill
selects exactly those rows, computes their key from ``normalized_name`` and
patches that one column in a single batch.  Rows that already have a key are
never touched, so running the backfill twice in a row writes nothing the
second time.

Two triggers, both owned here:

    startup           -> start()
    catalog refreshed -> CatalogEvents listener registered by attach()

Without an available phonetic provider the job does not run at all; the
tier strategy table's downgrade keeps lookups correct with an empty field.
"""

from __future__ import annotations

import structlog

from jutsudex.interfaces.entry_store import IEntryStore
from jutsudex.interfaces.phonetic_provider import IPhoneticProvider, phonetic_available
from jutsudex.models.entry import EntryField
from jutsudex.pipeline.catalog_events import CatalogEvents
from jutsudex.utils.logging import get_logger


class PhoneticIndexMaintainer:
    """Idempotent backfill of phonetic keys.

    Parameters
    ----------
    store:
        Entry store to read pending rows from and patch.
    phonetic:
        Optional phonetic provider.
    """

    def __init__(
        self,
        store: IEntryStore,
        phonetic: IPhoneticProvider | None = None,
    ) -> None:
        self._store = store
        self._phonetic = phonetic
        self._logger: structlog.BoundLogger = get_logger(__name__)

    async def backfill(self) -> int:
        """Fill every empty ``phonetic_name``.  Returns the number of rows written.

        Only the phonetic column is patched, and only where the stored row
        still has an empty key and the normalized name it was read with.
        Names whose key comes out empty (punctuation only) stay pending and
        are not counted.
        """
        if not phonetic_available(self._phonetic):
            self._logger.debug("phonetic_backfill_skipped", reason="provider_unavailable")
            return 0

        pending = await self._store.find_exact(EntryField.PHONETIC_NAME, "")
        keyed = []
        for entry in pending:
            key = self._phonetic.phoneticize(entry.normalized_name)
            if key:
                keyed.append(entry.with_phonetic_name(key))

        if not keyed:
            self._logger.debug("phonetic_backfill_noop", pending=len(pending))
            return 0

        written = await self._store.set_phonetic_names(keyed)

        self._logger.info(
            "phonetic_backfill_complete",
            provider=self._phonetic.get_provider_name(),
            rows=written,
            superseded=len(keyed) - written,
        )
        return written

    async def start(self) -> int:
        """Startup trigger: run one backfill."""
        return await self.backfill()

    def attach(self, events: CatalogEvents) -> None:
        """Run the backfill after every successful catalog refresh."""
        events.subscribe(self._on_catalog_refreshed)

    def detach(self, events: CatalogEvents) -> None:
        events.unsubscribe(self._on_catalog_refreshed)

    async def _on_catalog_refreshed(self) -> None:
        await self.backfill()
