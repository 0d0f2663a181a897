"""Domain and payload models for jutsudex."""

from jutsudex.models.entry import Entry, EntryField, MatchTier, SearchResult
from jutsudex.models.source import AudioClip, AudioListing, CatalogPage, Pagination, SourceJutsu

__all__ = [
    "AudioClip",
    "AudioListing",
    "CatalogPage",
    "Entry",
    "EntryField",
    "MatchTier",
    "Pagination",
    "SearchResult",
    "SourceJutsu",
]
