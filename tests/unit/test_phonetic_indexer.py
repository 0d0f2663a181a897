"""Unit tests for PhoneticIndexMaintainer (backfill and its triggers)."""

from __future__ import annotations

from pathlib import Path

import pytest
import pytest_asyncio

from conftest import FakePhoneticProvider, make_entry
from jutsudex.models.entry import Entry, EntryField
from jutsudex.pipeline.catalog_events import CatalogEvents
from jutsudex.providers.store.memory_entry_store import MemoryEntryStore
from jutsudex.providers.store.sqlite_entry_store import SQLiteEntryStore
from jutsudex.services.phonetic_indexer import PhoneticIndexMaintainer


class _IngestDuringBackfill(SQLiteEntryStore):
    """SQLite store where a catalog refresh lands right after the pending rows are read."""

    def __init__(self, db_path: Path, refreshed: list[Entry]) -> None:
        super().__init__(db_path=db_path)
        self._refreshed = refreshed

    async def find_exact(self, field: EntryField, value: str) -> list[Entry]:
        rows = await super().find_exact(field, value)
        if self._refreshed:
            await self.upsert(self._refreshed)
            self._refreshed = []
        return rows


@pytest.fixture
def pending_store() -> MemoryEntryStore:
    return MemoryEntryStore(
        [
            make_entry(1, "火遁"),
            make_entry(2, "水遁·水龙弹之术"),
            make_entry(3, "祸盾", phonetic="already-set"),
        ]
    )


class TestBackfill:
    @pytest.mark.asyncio
    async def test_fills_only_pending_rows(self, pending_store, phonetic) -> None:
        maintainer = PhoneticIndexMaintainer(pending_store, phonetic=phonetic)

        written = await maintainer.backfill()

        assert written == 2
        rows = {e.id: e for e in await pending_store.find_substring(EntryField.NAME, "", 10)}
        assert rows[1].phonetic_name == "huodun"
        assert rows[2].phonetic_name == "shuidunshui龙弹zhishu"
        assert rows[3].phonetic_name == "already-set"

    @pytest.mark.asyncio
    async def test_uses_normalized_name(self, pending_store, phonetic) -> None:
        maintainer = PhoneticIndexMaintainer(pending_store, phonetic=phonetic)

        await maintainer.backfill()

        assert "水遁水龙弹之术" in phonetic.calls

    @pytest.mark.asyncio
    async def test_idempotent(self, pending_store, phonetic) -> None:
        maintainer = PhoneticIndexMaintainer(pending_store, phonetic=phonetic)

        await maintainer.backfill()
        snapshot = await pending_store.find_substring(EntryField.NAME, "", 10)
        second = await maintainer.backfill()

        assert second == 0
        assert await pending_store.find_substring(EntryField.NAME, "", 10) == snapshot
        assert await pending_store.find_exact(EntryField.PHONETIC_NAME, "") == []

    @pytest.mark.asyncio
    async def test_punctuation_only_name_stays_pending_and_uncounted(self, phonetic) -> None:
        store = MemoryEntryStore([make_entry(1, "火遁"), make_entry(2, "！！")])
        maintainer = PhoneticIndexMaintainer(store, phonetic=phonetic)

        assert await maintainer.backfill() == 1
        assert await maintainer.backfill() == 0
        assert [e.id for e in await store.find_exact(EntryField.PHONETIC_NAME, "")] == [2]

    @pytest.mark.asyncio
    async def test_unavailable_provider_skips(self, pending_store, unavailable_phonetic) -> None:
        maintainer = PhoneticIndexMaintainer(pending_store, phonetic=unavailable_phonetic)

        assert await maintainer.backfill() == 0
        assert len(await pending_store.find_exact(EntryField.PHONETIC_NAME, "")) == 2
        assert unavailable_phonetic.calls == []

    @pytest.mark.asyncio
    async def test_missing_provider_skips(self, pending_store) -> None:
        maintainer = PhoneticIndexMaintainer(pending_store, phonetic=None)

        assert await maintainer.backfill() == 0


class TestTriggers:
    @pytest.mark.asyncio
    async def test_start_runs_backfill(self, pending_store, phonetic) -> None:
        maintainer = PhoneticIndexMaintainer(pending_store, phonetic=phonetic)

        assert await maintainer.start() == 2

    @pytest.mark.asyncio
    async def test_refresh_event_runs_backfill(self, phonetic) -> None:
        store = MemoryEntryStore()
        events = CatalogEvents()
        maintainer = PhoneticIndexMaintainer(store, phonetic=phonetic)
        maintainer.attach(events)

        await store.upsert([make_entry(7, "火遁")])
        await events.notify_refreshed()
        await events.drain()

        rows = await store.find_exact(EntryField.PHONETIC_NAME, "huodun")
        assert [e.id for e in rows] == [7]

    @pytest.mark.asyncio
    async def test_detach_stops_backfill(self) -> None:
        provider = FakePhoneticProvider()
        store = MemoryEntryStore([make_entry(7, "火遁")])
        events = CatalogEvents()
        maintainer = PhoneticIndexMaintainer(store, phonetic=provider)

        maintainer.attach(events)
        maintainer.detach(events)
        await events.notify_refreshed()

        assert events.listener_count == 0
        assert provider.calls == []


class TestConcurrentIngest:
    @pytest_asyncio.fixture
    async def racing_store(self, tmp_path: Path) -> _IngestDuringBackfill:
        store = _IngestDuringBackfill(
            tmp_path / "catalog.db",
            refreshed=[Entry.from_source(1, "水遁", "renamed upstream")],
        )
        await store.initialize()
        await store.upsert([make_entry(1, "火遁", "original")])
        return store

    @pytest.mark.asyncio
    async def test_backfill_never_reverts_a_concurrent_rename(self, racing_store, phonetic) -> None:
        maintainer = PhoneticIndexMaintainer(racing_store, phonetic=phonetic)

        assert await maintainer.backfill() == 0

        (entry,) = await racing_store.find_exact(EntryField.NAME, "水遁")
        assert entry.description == "renamed upstream"
        assert entry.normalized_name == "水遁"
        assert entry.phonetic_pending

    @pytest.mark.asyncio
    async def test_next_backfill_keys_the_renamed_row(self, racing_store, phonetic) -> None:
        maintainer = PhoneticIndexMaintainer(racing_store, phonetic=phonetic)

        await maintainer.backfill()
        assert await maintainer.backfill() == 1

        (entry,) = await racing_store.find_exact(EntryField.PHONETIC_NAME, "shuidun")
        assert entry.name == "水遁"
        assert await racing_store.find_exact(EntryField.PHONETIC_NAME, "huodun") == []
