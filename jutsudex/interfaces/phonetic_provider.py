"""Abstract base class for phonetic (romanization) providers.

A phonetic provider turns an already-normalized technique name into a
lowercase romanized key, so that names which sound alike but are written
with different characters compare equal.  The capability is optional: the
tier strategy table downgrades ``HOMOPHONE`` lookups to ``NORMAL`` when no
provider is available, and the phonetic backfill simply does not run.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class IPhoneticProvider(ABC):
    """Contract for phonetic key generation."""

    @abstractmethod
    def phoneticize(self, normalized: str) -> str:
        """Convert *normalized* into its lowercase romanized key.

        Must be deterministic and total over normalized strings.

        Parameters
        ----------
        normalized:
            A string already passed through
            :func:`jutsudex.utils.text_normalizer.normalize`.

        Returns
        -------
        str
            The lowercase key (empty for empty input).
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider can currently produce keys."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""


def phonetic_available(provider: IPhoneticProvider | None) -> bool:
    """Return ``True`` when *provider* exists and reports itself available."""
    return provider is not None and provider.is_available()
