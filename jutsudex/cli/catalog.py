"""Command-line interface for the jutsudex catalog.

Usage::

    python -m jutsudex.cli update
    python -m jutsudex.cli info 火遁豪火球之术
    python -m jutsudex.cli release "Fire Style"
    python -m jutsudex.cli search 火遁 --limit 5
    python -m jutsudex.cli backfill
    python -m jutsudex.cli clear --yes

Messages go to stdout in the configured locale; structured logs go to
stderr.  Application errors print a one-line message to stderr and exit
with status 1.  A lookup miss is not an error.
"""

from __future__ import annotations

import argparse
import asyncio
import sys

import httpx

from jutsudex.config.settings import Settings
from jutsudex.interfaces.entry_store import IEntryStore
from jutsudex.pipeline.catalog_events import CatalogEvents
from jutsudex.providers.catalog.http_catalog_source import HttpCatalogSource
from jutsudex.providers.phonetic.pypinyin_provider import PinyinPhoneticProvider
from jutsudex.providers.store.sqlite_entry_store import SQLiteEntryStore
from jutsudex.services.catalog_service import CatalogService, ReleaseStatus
from jutsudex.services.match_resolver import TieredMatchResolver
from jutsudex.services.output_formatter import MessageFormatter
from jutsudex.services.phonetic_indexer import PhoneticIndexMaintainer
from jutsudex.services.search_aggregator import SearchAggregator
from jutsudex.utils.errors import JutsudexError
from jutsudex.utils.logging import configure_logging


def _build_service(
    app_settings: Settings, http_client: httpx.AsyncClient
) -> tuple[CatalogService, PhoneticIndexMaintainer, IEntryStore]:
    """Wire the store, source and phonetic provider into a catalog service.

    The maintainer is attached to the refresh events, so ``update`` also
    backfills phonetic keys.
    """
    store = SQLiteEntryStore(db_path=app_settings.catalog_db_path)
    source = HttpCatalogSource(
        base_url=app_settings.source_url,
        http_client=http_client,
        timeout=app_settings.http_timeout,
    )
    phonetic = PinyinPhoneticProvider(enabled=app_settings.phonetic_enabled)

    events = CatalogEvents()
    maintainer = PhoneticIndexMaintainer(store=store, phonetic=phonetic)
    maintainer.attach(events)

    service = CatalogService(
        store=store,
        source=source,
        resolver=TieredMatchResolver(store=store, phonetic=phonetic),
        aggregator=SearchAggregator(store=store, phonetic=phonetic),
        events=events,
        settings=app_settings,
    )
    return service, maintainer, store


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


async def _handle_update(service: CatalogService, formatter: MessageFormatter) -> int:
    total = await service.update_catalog()
    # The process exits after this command; let the backfill finish first.
    await service.wait_for_listeners()
    print(formatter.text("update.completed", total=total))
    return 0


async def _handle_clear(
    args: argparse.Namespace,
    service: CatalogService,
    store: IEntryStore,
    formatter: MessageFormatter,
) -> int:
    """Delete every entry, asking first unless ``--yes`` was given."""
    if not args.yes:
        count = await store.count()
        answer = input(formatter.text("clear.confirm", count=count))
        if answer.strip().lower() not in ("y", "yes"):
            print(formatter.text("clear.aborted"))
            return 0

    removed = await service.clear_catalog()
    print(formatter.text("clear.completed", removed=removed))
    return 0


async def _report_not_found(
    name: str, service: CatalogService, formatter: MessageFormatter
) -> None:
    """Print the not-found line, followed by a search when configured to."""
    if not service.settings.search_on_failed:
        print(formatter.text("common.not_found"))
        return

    print(formatter.text("common.not_found_try_search"))
    result = await service.search(name)
    print(formatter.render_search(result))


async def _handle_info(
    args: argparse.Namespace, service: CatalogService, formatter: MessageFormatter
) -> int:
    lookup = await service.lookup(args.name)
    if not lookup.found:
        await _report_not_found(args.name, service, formatter)
        return 0

    print(formatter.render_lookup(lookup))
    return 0


async def _handle_release(
    args: argparse.Namespace, service: CatalogService, formatter: MessageFormatter
) -> int:
    outcome = await service.release(args.name)
    if outcome.status is ReleaseStatus.NOT_FOUND:
        await _report_not_found(args.name, service, formatter)
    elif outcome.status is ReleaseStatus.NO_AUDIO:
        print(formatter.text("release.no_audio"))
    else:
        print(outcome.audio_url)
    return 0


async def _handle_search(
    args: argparse.Namespace, service: CatalogService, formatter: MessageFormatter
) -> int:
    result = await service.search(args.keyword, args.limit)
    print(formatter.render_search(result))
    return 0


async def _handle_backfill(
    maintainer: PhoneticIndexMaintainer, formatter: MessageFormatter
) -> int:
    rows = await maintainer.backfill()
    print(formatter.text("backfill.completed", rows=rows))
    return 0


async def _dispatch(
    args: argparse.Namespace,
    service: CatalogService,
    maintainer: PhoneticIndexMaintainer,
    store: IEntryStore,
    formatter: MessageFormatter,
) -> int:
    if args.command == "update":
        return await _handle_update(service, formatter)
    if args.command == "clear":
        return await _handle_clear(args, service, store, formatter)
    if args.command == "info":
        return await _handle_info(args, service, formatter)
    if args.command == "release":
        return await _handle_release(args, service, formatter)
    if args.command == "search":
        return await _handle_search(args, service, formatter)
    if args.command == "backfill":
        return await _handle_backfill(maintainer, formatter)
    raise ValueError(f"Unknown command: {args.command}")


async def _run(args: argparse.Namespace, app_settings: Settings) -> int:
    """Build the services, run one command, and map errors to exit status 1."""
    try:
        formatter = MessageFormatter(
            locale=app_settings.locale,
            preview_limit=app_settings.description_preview_limit,
        )
        async with httpx.AsyncClient(timeout=app_settings.http_timeout) as http_client:
            service, maintainer, store = _build_service(app_settings, http_client)
            await store.initialize()
            return await _dispatch(args, service, maintainer, store, formatter)
    except JutsudexError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the catalog CLI."""
    parser = argparse.ArgumentParser(
        prog="jutsudex",
        description="Look up, search and maintain the ninja technique catalog.",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("update", help="Refresh the local catalog from the remote source")

    clear_parser = subparsers.add_parser("clear", help="Delete every stored entry")
    clear_parser.add_argument(
        "--yes", "-y", action="store_true", help="Skip the confirmation prompt"
    )

    info_parser = subparsers.add_parser("info", help="Show a technique's description and page")
    info_parser.add_argument("name", help="Technique name")

    release_parser = subparsers.add_parser("release", help="Print a random audio clip URL")
    release_parser.add_argument("name", help="Technique name")

    search_parser = subparsers.add_parser("search", help="Search techniques by keyword")
    search_parser.add_argument("keyword", help="Substring to search for")
    search_parser.add_argument(
        "--limit",
        "-l",
        type=_positive_int,
        default=None,
        help="Maximum results to display (default: SEARCH_LIMIT)",
    )

    subparsers.add_parser("backfill", help="Fill missing phonetic keys")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point: parse arguments, load Settings and run one command."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    app_settings = Settings()
    configure_logging(
        log_level=app_settings.log_level,
        json_output=(app_settings.app_env == "production"),
    )

    sys.exit(asyncio.run(_run(args, app_settings)))


if __name__ == "__main__":
    main()
