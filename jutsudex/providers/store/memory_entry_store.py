"""In-memory entry store.

Simple dict-backed store suitable for tests and throwaway sessions.  Rows
are returned in ascending ``id`` order, matching SQLiteEntryStore, so the
two are interchangeable behind IEntryStore.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from jutsudex.interfaces.entry_store import IEntryStore
from jutsudex.models.entry import Entry, EntryField

logger = structlog.get_logger(logger_name=__name__)


class MemoryEntryStore(IEntryStore):
    """Dict-backed catalog storage, keyed by entry ``id``.

    Parameters
    ----------
    entries:
        Optional initial contents.
    """

    def __init__(self, entries: Iterable[Entry] = ()) -> None:
        self._entries: dict[int, Entry] = {e.id: e for e in entries}

    def _ordered(self) -> list[Entry]:
        return [self._entries[k] for k in sorted(self._entries)]

    # ------------------------------------------------------------------
    # IEntryStore implementation
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        """Nothing to create; present for interface parity."""

    async def find_exact(self, field: EntryField, value: str) -> list[Entry]:
        return [e for e in self._ordered() if e.field_value(field) == value]

    async def find_substring(self, field: EntryField, value: str, limit: int) -> list[Entry]:
        matches = [e for e in self._ordered() if value in e.field_value(field)]
        return matches[:limit]

    async def upsert(self, entries: Iterable[Entry]) -> int:
        written = 0
        for entry in entries:
            self._entries[entry.id] = entry
            written += 1
        logger.debug("entries_upserted", count=written)
        return written

    async def set_phonetic_names(self, entries: Iterable[Entry]) -> int:
        written = 0
        for entry in entries:
            current = self._entries.get(entry.id)
            if (
                current is None
                or current.phonetic_name
                or current.normalized_name != entry.normalized_name
            ):
                continue
            self._entries[entry.id] = current.with_phonetic_name(entry.phonetic_name)
            written += 1
        logger.debug("phonetic_names_set", count=written)
        return written

    async def delete_all(self) -> int:
        removed = len(self._entries)
        self._entries.clear()
        logger.debug("entries_deleted", count=removed)
        return removed

    async def count(self) -> int:
        return len(self._entries)

    def get_provider_name(self) -> str:
        return "memory_entry_store"
