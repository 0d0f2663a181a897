"""Entry store providers.

SQLiteEntryStore is the persistent default used by the API and CLI.
MemoryEntryStore keeps everything in a dict and is used by tests; both
return rows in ascending ``id`` order.
"""

from jutsudex.providers.store.memory_entry_store import MemoryEntryStore
from jutsudex.providers.store.sqlite_entry_store import SQLiteEntryStore

__all__ = ["MemoryEntryStore", "SQLiteEntryStore"]
