"""Abstract base class for remote catalog sources.

Defines the contract for reading the authoritative technique listing and
each technique's audio clips from wherever they are published.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from jutsudex.models.source import SourceJutsu


class ICatalogSource(ABC):
    """Contract for the upstream technique catalog."""

    @abstractmethod
    async def fetch_all(self) -> tuple[list[SourceJutsu], int]:
        """Fetch every technique in the catalog.

        Returns
        -------
        tuple[list[SourceJutsu], int]
            The techniques and the total the source reported.
        """

    @abstractmethod
    async def fetch_audio_urls(self, entry_id: int) -> list[str]:
        """Return the audio clip URLs recorded for *entry_id* (may be empty)."""

    @abstractmethod
    def entry_url(self, entry_id: int) -> str:
        """Return the public web page URL for *entry_id*."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
