"""Core domain models for the technique catalog.

Defines the match-tier enum, the indexed-field enum and the frozen Pydantic
v2 models for catalog entries and merged search results.

Key relationships:
    - Entry rows are written by CatalogService (ingest) and
      PhoneticIndexMaintainer (phonetic backfill) through an IEntryStore
    - TieredMatchResolver and SearchAggregator read Entry rows by EntryField
    - SearchResult is what the aggregator hands to the CLI and API surfaces
"""

from __future__ import annotations

from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, Field

from jutsudex.utils.text_normalizer import normalize


class MatchTier(IntEnum):
    """Strictness level for name matching, ordered strictest first.

    Integer values are the ordering: every lookup walks tiers from
    ``STRICT`` up to a configured maximum, so ``STRICT < NORMAL < HOMOPHONE``
    must hold.  Never persisted.
    """

    STRICT = 0      # exact equality with the display name
    NORMAL = 1      # equality after punctuation/symbol/space stripping
    HOMOPHONE = 2   # equality of lowercase romanized keys

    @classmethod
    def parse(cls, value: int | str | MatchTier) -> MatchTier:
        """Accept a tier, its integer value, or its case-insensitive name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            stripped = value.strip()
            if stripped.isdigit():
                return cls(int(stripped))
            try:
                return cls[stripped.upper()]
            except KeyError:
                msg = f"Unknown match tier {value!r}; expected one of {[t.name.lower() for t in cls]}"
                raise ValueError(msg) from None
        return cls(value)


class EntryField(str, Enum):  # noqa: UP042 - StrEnum requires Python 3.11+
    """Indexed Entry fields that the stores know how to query.

    Stores map these to a column or attribute name; a free-form string is
    never interpolated into a query.
    """

    NAME = "name"
    NORMALIZED_NAME = "normalized_name"
    PHONETIC_NAME = "phonetic_name"


class Entry(BaseModel):
    """A single technique in the catalog.

    ``normalized_name`` is derived from ``name`` and must only be produced
    by :meth:`from_source`, which recomputes it.  ``phonetic_name`` is empty
    until the phonetic backfill fills it in.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(gt=0)
    name: str
    description: str = ""
    normalized_name: str
    phonetic_name: str = ""

    @classmethod
    def from_source(cls, entry_id: int, name: str, description: str) -> Entry:
        """Build a freshly ingested entry with a pending phonetic key.

        The phonetic key is always blank here: if an upstream rename
        changed ``name``, the stale key must not survive the upsert.
        """
        return cls(
            id=entry_id,
            name=name,
            description=description,
            normalized_name=normalize(name),
            phonetic_name="",
        )

    @property
    def phonetic_pending(self) -> bool:
        return self.phonetic_name == ""

    def with_phonetic_name(self, phonetic_name: str) -> Entry:
        return self.model_copy(update={"phonetic_name": phonetic_name})

    def field_value(self, field: EntryField) -> str:
        return getattr(self, field.value)


class SearchResult(BaseModel):
    """Priority-merged search output.

    ``entries`` holds at most ``limit`` items in merged order;
    ``total_count`` is the number of distinct matches before that cap.
    """

    model_config = ConfigDict(frozen=True)

    entries: list[Entry] = Field(default_factory=list)
    total_count: int = Field(default=0, ge=0)

    @property
    def is_empty(self) -> bool:
        return self.total_count == 0

    @property
    def truncated(self) -> bool:
        return self.total_count > len(self.entries)
