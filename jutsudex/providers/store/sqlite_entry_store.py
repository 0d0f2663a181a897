"""SQLite-backed entry store.

Persists catalog entries to a local SQLite database (``data/catalog.db`` by
default).  Uses ``aiosqlite`` for async I/O.  Each public method opens its
own connection, so concurrent readers never share cursor state; an upsert
batch is written in a single transaction.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite
import structlog

from jutsudex.interfaces.entry_store import IEntryStore
from jutsudex.models.entry import Entry, EntryField
from jutsudex.utils.errors import EntryStoreError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_DB_PATH = Path("data/catalog.db")

_CREATE_TABLE_SQL = """\
CREATE TABLE IF NOT EXISTS entries (
    id               INTEGER PRIMARY KEY,
    name             TEXT    NOT NULL,
    description      TEXT    NOT NULL DEFAULT '',
    normalized_name  TEXT    NOT NULL,
    phonetic_name    TEXT    NOT NULL DEFAULT ''
);
"""

_CREATE_INDICES_SQL = [
    "CREATE INDEX IF NOT EXISTS idx_entries_name ON entries(name);",
    "CREATE INDEX IF NOT EXISTS idx_entries_normalized ON entries(normalized_name);",
    "CREATE INDEX IF NOT EXISTS idx_entries_phonetic ON entries(phonetic_name);",
]

_UPSERT_SQL = """\
INSERT INTO entries (id, name, description, normalized_name, phonetic_name)
VALUES (?, ?, ?, ?, ?)
ON CONFLICT(id)
DO UPDATE SET name            = excluded.name,
              description     = excluded.description,
              normalized_name = excluded.normalized_name,
              phonetic_name   = excluded.phonetic_name;
"""

_SET_PHONETIC_SQL = """\
UPDATE entries
   SET phonetic_name = ?
 WHERE id = ? AND phonetic_name = '' AND normalized_name = ?;
"""

_SELECT_COLUMNS = "id, name, description, normalized_name, phonetic_name"

# Column names are looked up from this map and never taken from callers.
_COLUMNS: dict[EntryField, str] = {
    EntryField.NAME: "name",
    EntryField.NORMALIZED_NAME: "normalized_name",
    EntryField.PHONETIC_NAME: "phonetic_name",
}


class SQLiteEntryStore(IEntryStore):
    """SQLite-backed catalog persistence."""

    def __init__(self, db_path: str | Path = _DEFAULT_DB_PATH) -> None:
        self._db_path = Path(db_path)

    @asynccontextmanager
    async def _connect(self, operation: str) -> AsyncIterator[aiosqlite.Connection]:
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                db.row_factory = aiosqlite.Row
                yield db
        except aiosqlite.Error as exc:
            raise EntryStoreError(
                message=f"{operation} failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    async def initialize(self) -> None:
        """Create the entries table and indices if they don't exist."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        async with self._connect("initialize") as db:
            await db.execute(_CREATE_TABLE_SQL)
            for idx_sql in _CREATE_INDICES_SQL:
                await db.execute(idx_sql)
            await db.commit()
        logger.info("entry_store_initialized", path=str(self._db_path))

    async def find_exact(self, field: EntryField, value: str) -> list[Entry]:
        """Return entries whose *field* equals *value* (BINARY collation)."""
        column = _COLUMNS[field]
        async with self._connect("find_exact") as db:
            cursor = await db.execute(
                f"SELECT {_SELECT_COLUMNS} FROM entries WHERE {column} = ? ORDER BY id",
                (value,),
            )
            rows = await cursor.fetchall()
        return [_row_to_entry(r) for r in rows]

    async def find_substring(self, field: EntryField, value: str, limit: int) -> list[Entry]:
        """Return up to *limit* entries whose *field* contains *value*.

        ``instr`` is used instead of ``LIKE`` because ``LIKE`` folds ASCII
        case and treats ``%``/``_`` in the key as wildcards.
        """
        column = _COLUMNS[field]
        async with self._connect("find_substring") as db:
            cursor = await db.execute(
                f"SELECT {_SELECT_COLUMNS} FROM entries "
                f"WHERE instr({column}, ?) > 0 ORDER BY id LIMIT ?",
                (value, limit),
            )
            rows = await cursor.fetchall()
        return [_row_to_entry(r) for r in rows]

    async def upsert(self, entries: Iterable[Entry]) -> int:
        """Insert or replace *entries* in one transaction."""
        params = [
            (e.id, e.name, e.description, e.normalized_name, e.phonetic_name)
            for e in entries
        ]
        if not params:
            return 0

        async with self._connect("upsert") as db:
            await db.executemany(_UPSERT_SQL, params)
            await db.commit()

        logger.debug("entries_upserted", count=len(params))
        return len(params)

    async def set_phonetic_names(self, entries: Iterable[Entry]) -> int:
        """Patch ``phonetic_name`` in one transaction, guarded per row.

        The ``WHERE`` clause re-checks the empty key and the normalized name,
        so rows an ingest rewrote after they were read are skipped.
        """
        params = [(e.phonetic_name, e.id, e.normalized_name) for e in entries]
        if not params:
            return 0

        async with self._connect("set_phonetic_names") as db:
            cursor = await db.executemany(_SET_PHONETIC_SQL, params)
            await db.commit()
            written = cursor.rowcount

        logger.debug("phonetic_names_set", count=written, requested=len(params))
        return written

    async def delete_all(self) -> int:
        """Remove every entry."""
        async with self._connect("delete_all") as db:
            cursor = await db.execute("DELETE FROM entries")
            await db.commit()
            removed = cursor.rowcount
        logger.info("entries_deleted", count=removed)
        return removed

    async def count(self) -> int:
        async with self._connect("count") as db:
            cursor = await db.execute("SELECT COUNT(*) FROM entries")
            row = await cursor.fetchone()
        return int(row[0]) if row else 0

    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
        return "sqlite_entry_store"


def _row_to_entry(row: aiosqlite.Row) -> Entry:
    return Entry(
        id=row["id"],
        name=row["name"],
        description=row["description"],
        normalized_name=row["normalized_name"],
        phonetic_name=row["phonetic_name"],
    )
