"""Public interface definitions for every external collaborator.

The matching core and the catalog service reach storage, the remote
catalog and the phonetic capability only through the abstract base classes
in this package.  Concrete adapters live in ``jutsudex/providers/`` and are
wired together in ``jutsudex/main.py`` (HTTP API) and ``jutsudex/cli``.

CONCRETE PROVIDER MAP:
    Interface            →  Concrete implementations (in jutsudex/providers/)
    ─────────────────────────────────────────────────────────────────────
    IEntryStore          →  SQLiteEntryStore, MemoryEntryStore
    IPhoneticProvider    →  PinyinPhoneticProvider
    ICatalogSource       →  HttpCatalogSource
"""

from jutsudex.interfaces.catalog_source import ICatalogSource
from jutsudex.interfaces.entry_store import IEntryStore
from jutsudex.interfaces.phonetic_provider import IPhoneticProvider, phonetic_available

__all__ = [
    "ICatalogSource",
    "IEntryStore",
    "IPhoneticProvider",
    "phonetic_available",
]
