"""Unit tests for the catalog CLI (jutsudex.cli.catalog)."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from conftest import FakePhoneticProvider, make_catalog_source, make_settings
from jutsudex.cli import catalog as cli
from jutsudex.models.entry import EntryField
from jutsudex.models.source import SourceJutsu
from jutsudex.pipeline.catalog_events import CatalogEvents
from jutsudex.providers.store.memory_entry_store import MemoryEntryStore
from jutsudex.services.catalog_service import CatalogService
from jutsudex.services.match_resolver import TieredMatchResolver
from jutsudex.services.output_formatter import MessageFormatter
from jutsudex.services.phonetic_indexer import PhoneticIndexMaintainer
from jutsudex.services.search_aggregator import SearchAggregator
from jutsudex.utils.errors import CatalogFetchError


# ======================================================================
# Shared helpers
# ======================================================================


def _wire(store, source=None, phonetic=None, **settings_overrides):
    """Build (service, maintainer, store) the way _build_service does."""
    phonetic = phonetic or FakePhoneticProvider()
    events = CatalogEvents()
    maintainer = PhoneticIndexMaintainer(store, phonetic=phonetic)
    maintainer.attach(events)
    service = CatalogService(
        store=store,
        source=source or make_catalog_source(),
        resolver=TieredMatchResolver(store, phonetic=phonetic),
        aggregator=SearchAggregator(store, phonetic=phonetic),
        events=events,
        settings=make_settings(**settings_overrides),
    )
    return service, maintainer, store


async def _run_command(argv: list[str], wired, capsys) -> tuple[int, str]:
    args = cli._build_parser().parse_args(argv)
    service, maintainer, store = wired
    formatter = MessageFormatter(locale="en-US", preview_limit=5)
    code = await cli._dispatch(args, service, maintainer, store, formatter)
    return code, capsys.readouterr().out


# ======================================================================
# Parser
# ======================================================================


class TestParser:
    def test_search_limit_short_flag(self) -> None:
        args = cli._build_parser().parse_args(["search", "火遁", "-l", "3"])

        assert args.command == "search"
        assert args.keyword == "火遁"
        assert args.limit == 3

    def test_search_limit_defaults_to_none(self) -> None:
        assert cli._build_parser().parse_args(["search", "x"]).limit is None

    def test_search_limit_must_be_positive(self) -> None:
        with pytest.raises(SystemExit):
            cli._build_parser().parse_args(["search", "x", "--limit", "0"])

    def test_clear_yes_flag(self) -> None:
        assert cli._build_parser().parse_args(["clear", "-y"]).yes is True
        assert cli._build_parser().parse_args(["clear"]).yes is False

    def test_no_command_exits_1(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])

        assert exc_info.value.code == 1


# ======================================================================
# Command handlers
# ======================================================================


class TestCommands:
    @pytest.mark.asyncio
    async def test_info_found(self, memory_store, capsys) -> None:
        code, out = await _run_command(["info", "Fire·Style"], _wire(memory_store), capsys)

        assert code == 0
        assert out.splitlines() == [
            "Fire-Style",
            "Breathes fire.",
            "https://catalog.test/jutsus/1",
        ]

    @pytest.mark.asyncio
    async def test_info_not_found_falls_back_to_search(self, memory_store, capsys) -> None:
        code, out = await _run_command(["info", "Fire"], _wire(memory_store), capsys)

        assert code == 0
        assert out.splitlines() == [
            "No such technique, searching instead...",
            "Search results:",
            "Fire-Style: Breat…",
            "Fire Style!: Also …",
        ]

    @pytest.mark.asyncio
    async def test_info_not_found_without_search(self, memory_store, capsys) -> None:
        wired = _wire(memory_store, search_on_failed=False)

        code, out = await _run_command(["info", "遁术"], wired, capsys)

        assert code == 0
        assert out.strip() == "No such technique."

    @pytest.mark.asyncio
    async def test_release_prints_audio_url(self, memory_store, capsys) -> None:
        source = make_catalog_source(audios={12: ["https://cdn.test/only.mp3"]})

        code, out = await _run_command(["release", "火遁"], _wire(memory_store, source), capsys)

        assert code == 0
        assert out.strip() == "https://cdn.test/only.mp3"

    @pytest.mark.asyncio
    async def test_release_no_audio(self, memory_store, capsys) -> None:
        code, out = await _run_command(["release", "火遁"], _wire(memory_store), capsys)

        assert out.strip() == "This technique has no audio yet."

    @pytest.mark.asyncio
    async def test_search_truncated(self, memory_store, capsys) -> None:
        code, out = await _run_command(["search", "Fire Style", "-l", "1"], _wire(memory_store), capsys)

        # strict hit [2], normal hit [1]: two distinct, one shown
        assert code == 0
        assert out.splitlines() == [
            "Search results:",
            "Fire Style!: Also …",
            "(2 results, showing the first 1)",
        ]

    @pytest.mark.asyncio
    async def test_search_empty(self, memory_store, capsys) -> None:
        code, out = await _run_command(["search", "Lightning"], _wire(memory_store), capsys)

        assert out.strip() == "No matching techniques."

    @pytest.mark.asyncio
    async def test_update_reports_total_and_backfills(self, capsys) -> None:
        store = MemoryEntryStore()
        source = make_catalog_source([SourceJutsu(id=1, name="火遁"), SourceJutsu(id=2, name="水遁")])

        code, out = await _run_command(["update"], _wire(store, source), capsys)

        assert code == 0
        assert out.strip() == "Catalog updated: 2 techniques."
        assert await store.find_exact(EntryField.PHONETIC_NAME, "") == []

    @pytest.mark.asyncio
    async def test_backfill(self, fire_style_entries, capsys) -> None:
        store = MemoryEntryStore(fire_style_entries)

        code, out = await _run_command(["backfill"], _wire(store), capsys)

        assert out.strip() == "Phonetic index updated for 3 entries."

    @pytest.mark.asyncio
    async def test_clear_with_yes(self, memory_store, capsys) -> None:
        code, out = await _run_command(["clear", "--yes"], _wire(memory_store), capsys)

        assert out.strip() == "Catalog cleared: 6 entries removed."
        assert await memory_store.count() == 0

    @pytest.mark.asyncio
    async def test_clear_prompt_declined(self, memory_store, capsys) -> None:
        with patch("builtins.input", return_value="n") as prompt:
            code, out = await _run_command(["clear"], _wire(memory_store), capsys)

        prompt.assert_called_once_with("Delete all 6 entries? [y/N] ")
        assert out.strip() == "Aborted."
        assert await memory_store.count() == 6

    @pytest.mark.asyncio
    async def test_clear_prompt_accepted(self, memory_store, capsys) -> None:
        with patch("builtins.input", return_value="Y"):
            await _run_command(["clear"], _wire(memory_store), capsys)

        assert await memory_store.count() == 0


# ======================================================================
# Error mapping
# ======================================================================


class TestRun:
    @pytest.mark.asyncio
    async def test_application_error_exits_1(self, capsys) -> None:
        store = MemoryEntryStore()
        source = make_catalog_source()
        source.fetch_all = AsyncMock(side_effect=CatalogFetchError(message="HTTP 503", provider_name="catalog"))
        wired = _wire(store, source)
        args = cli._build_parser().parse_args(["update"])

        with patch.object(cli, "_build_service", return_value=wired):
            code = await cli._run(args, make_settings())

        assert code == 1
        assert capsys.readouterr().err.strip().endswith("Error: [catalog] HTTP 503")

    @pytest.mark.asyncio
    async def test_unknown_locale_exits_1(self, capsys) -> None:
        args = cli._build_parser().parse_args(["backfill"])

        code = await cli._run(args, make_settings(locale="xx-XX"))

        assert code == 1
        assert "Unknown locale" in capsys.readouterr().err

    def test_main_exits_with_command_status(self) -> None:
        with patch.object(cli, "_run", new=AsyncMock(return_value=0)), patch.object(
            cli, "configure_logging"
        ):
            with pytest.raises(SystemExit) as exc_info:
                cli.main(["search", "火遁"])

        assert exc_info.value.code == 0
