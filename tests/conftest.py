"""Shared pytest fixtures for the jutsudex test suite."""

from __future__ import annotations

from collections.abc import Iterable
from unittest.mock import AsyncMock, MagicMock

import pytest

from jutsudex.config.settings import Settings
from jutsudex.interfaces.catalog_source import ICatalogSource
from jutsudex.interfaces.phonetic_provider import IPhoneticProvider
from jutsudex.models.entry import Entry, MatchTier
from jutsudex.models.source import SourceJutsu
from jutsudex.providers.store.memory_entry_store import MemoryEntryStore
from jutsudex.utils.logging import configure_logging

# Keep stdout free of log lines; CLI tests assert on it.
configure_logging(log_level="WARNING")

# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

# Small syllable table: enough Han characters to build homophone pairs
# (火遁 / 祸盾) without depending on pypinyin in unit tests.
_SYLLABLES = {
    "火": "huo",
    "祸": "huo",
    "遁": "dun",
    "盾": "dun",
    "水": "shui",
    "税": "shui",
    "术": "shu",
    "书": "shu",
    "豪": "hao",
    "球": "qiu",
    "之": "zhi",
}


class FakePhoneticProvider(IPhoneticProvider):
    """Table-driven phonetic provider; unknown characters are lowercased."""

    def __init__(self, available: bool = True) -> None:
        self.available = available
        self.calls: list[str] = []

    def phoneticize(self, normalized: str) -> str:
        self.calls.append(normalized)
        return "".join(_SYLLABLES.get(ch, ch) for ch in normalized).lower()

    def is_available(self) -> bool:
        return self.available

    def get_provider_name(self) -> str:
        return "fake_phonetic"


def make_entry(entry_id: int, name: str, description: str = "", phonetic: str = "") -> Entry:
    """Build an entry the way ingest does, optionally with its phonetic key set."""
    entry = Entry.from_source(entry_id, name, description)
    return entry.with_phonetic_name(phonetic) if phonetic else entry


def make_settings(**overrides) -> Settings:
    """Settings with test defaults, isolated from any local .env file."""
    defaults = {
        "source_url": "https://catalog.test",
        "match_level": MatchTier.NORMAL,
        "search_limit": 10,
        "description_preview_limit": 10,
        "search_on_failed": True,
        "phonetic_enabled": True,
        "locale": "en-US",
    }
    defaults.update(overrides)
    return Settings(_env_file=None, **defaults)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fire_style_entries() -> list[Entry]:
    """Two names that differ only in punctuation, plus a case-sensitive one."""
    return [
        make_entry(1, "Fire-Style", "Breathes fire."),
        make_entry(2, "Fire Style!", "Also breathes fire."),
        make_entry(3, "Water Jutsu", "Summons water."),
    ]


@pytest.fixture
def han_entries() -> list[Entry]:
    """Han-character entries with phonetic keys already backfilled."""
    return [
        make_entry(10, "火遁·豪火球之术", "以口喷出巨大火球。", phonetic="huodunhaohuoqiuzhishu"),
        make_entry(11, "水遁", "操纵水的忍术。", phonetic="shuidun"),
        make_entry(12, "火遁", "火属性忍术的总称。", phonetic="huodun"),
    ]


@pytest.fixture
def memory_store(fire_style_entries: list[Entry], han_entries: list[Entry]) -> MemoryEntryStore:
    return MemoryEntryStore(fire_style_entries + han_entries)


@pytest.fixture
def phonetic() -> FakePhoneticProvider:
    return FakePhoneticProvider()


@pytest.fixture
def unavailable_phonetic() -> FakePhoneticProvider:
    return FakePhoneticProvider(available=False)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


def make_catalog_source(
    jutsus: Iterable[SourceJutsu] = (),
    audios: dict[int, list[str]] | None = None,
) -> MagicMock:
    """ICatalogSource mock serving a fixed listing and audio map."""
    listing = list(jutsus)
    audio_map = audios or {}

    source = MagicMock(spec=ICatalogSource)
    source.fetch_all = AsyncMock(return_value=(listing, len(listing)))
    source.fetch_audio_urls = AsyncMock(side_effect=lambda entry_id: list(audio_map.get(entry_id, [])))
    source.entry_url = MagicMock(side_effect=lambda entry_id: f"https://catalog.test/jutsus/{entry_id}")
    source.get_provider_name = MagicMock(return_value="catalog")
    return source
