"""Abstract base class for entry store providers.

Defines the contract for persisting catalog entries and answering the two
query primitives the matching core depends on: exact match by field and
capped substring match by field.  Implementations may use SQLite, an
in-memory list, or any other backend.  The resolver and the search
aggregator only ever talk to this interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from jutsudex.models.entry import Entry, EntryField


class IEntryStore(ABC):
    """Contract for catalog entry storage.

    All operations are async so network- or disk-backed stores do not block
    the event loop.  Result ordering must be stable: ascending ``id`` unless
    the implementation documents another deterministic order.  Per-row
    atomicity of :meth:`upsert` is the store's responsibility.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Create tables/indices if they don't exist.  Called at startup."""

    @abstractmethod
    async def find_exact(self, field: EntryField, value: str) -> list[Entry]:
        """Return every entry whose *field* equals *value* exactly.

        Parameters
        ----------
        field:
            The indexed field to compare.
        value:
            The already-transformed key.  Comparison is code-point equality,
            case-sensitive.

        Returns
        -------
        list[Entry]
            Zero or more entries in store order.
        """

    @abstractmethod
    async def find_substring(self, field: EntryField, value: str, limit: int) -> list[Entry]:
        """Return entries whose *field* contains *value* as a substring.

        Parameters
        ----------
        field:
            The indexed field to search.
        value:
            The already-transformed key.  Matching is case-sensitive and
            unanchored on both sides; an empty *value* matches every row.
        limit:
            Maximum number of rows to return.

        Returns
        -------
        list[Entry]
            At most *limit* entries in store order.
        """

    @abstractmethod
    async def upsert(self, entries: Iterable[Entry]) -> int:
        """Insert or wholesale-replace *entries* keyed by ``id``.

        Returns
        -------
        int
            Number of entries written.
        """

    @abstractmethod
    async def set_phonetic_names(self, entries: Iterable[Entry]) -> int:
        """Patch ``phonetic_name`` only, from the given entries.

        A row is written only while its stored ``phonetic_name`` is still
        empty and its stored ``normalized_name`` equals the entry's.  Rows
        renamed or keyed by someone else since the caller read them are left
        alone, so a backfill racing an ingest never writes stale data.  No
        other column is touched.

        Returns
        -------
        int
            Number of rows actually patched.
        """

    @abstractmethod
    async def delete_all(self) -> int:
        """Remove every entry.  Returns the number of rows removed."""

    @abstractmethod
    async def count(self) -> int:
        """Return the number of stored entries."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
