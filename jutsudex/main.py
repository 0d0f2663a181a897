"""jutsudex FastAPI application entry point.

Wires together the entry store, catalog source, phonetic provider, matching
services and routes via dependency injection.  Loads configuration from
``.env`` and ``config/config.yaml`` and configures structured logging.

Run with ``python -m jutsudex.main`` or ``uvicorn jutsudex.main:app``.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from jutsudex import __version__
from jutsudex.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from jutsudex.api.routes import router as api_router
from jutsudex.config.loader import load_config
from jutsudex.config.settings import Settings
from jutsudex.pipeline.catalog_events import CatalogEvents
from jutsudex.providers.catalog.http_catalog_source import HttpCatalogSource
from jutsudex.providers.phonetic.pypinyin_provider import PinyinPhoneticProvider
from jutsudex.providers.store.sqlite_entry_store import SQLiteEntryStore
from jutsudex.services.catalog_service import CatalogService
from jutsudex.services.match_resolver import TieredMatchResolver
from jutsudex.services.output_formatter import MessageFormatter
from jutsudex.services.phonetic_indexer import PhoneticIndexMaintainer
from jutsudex.services.search_aggregator import SearchAggregator
from jutsudex.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()
config = load_config(settings=settings)

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


def _build_all(app_settings: Settings) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    http_client = httpx.AsyncClient(timeout=app_settings.http_timeout)

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

    catalog_service = CatalogService(
        store=store,
        source=source,
        resolver=TieredMatchResolver(store=store, phonetic=phonetic),
        aggregator=SearchAggregator(store=store, phonetic=phonetic),
        events=events,
        settings=app_settings,
    )

    return {
        "http_client": http_client,
        "store": store,
        "catalog_source": source,
        "phonetic": phonetic,
        "events": events,
        "maintainer": maintainer,
        "catalog_service": catalog_service,
        "formatter": MessageFormatter(
            locale=app_settings.locale,
            preview_limit=app_settings.description_preview_limit,
        ),
        "provider_registry": {
            "store": store.get_provider_name(),
            "catalog": source.get_provider_name(),
            "phonetic": phonetic.is_available(),
        },
    }


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(
    app_settings: Settings | None = None,
    app_config: dict[str, Any] | None = None,
    components: dict[str, Any] | None = None,
) -> FastAPI:
    """Build and configure the FastAPI application.

    *components* replaces :func:`_build_all` when given; it must provide at
    least ``store``, ``maintainer``, ``catalog_service`` and ``formatter``.
    """
    app_settings = app_settings or settings
    app_config = app_config if app_config is not None else config

    @asynccontextmanager
    async def _lifespan(application: FastAPI):  # noqa: ANN202
        """Initialise all providers and services on startup, clean up on shutdown."""
        built = components if components is not None else _build_all(app_settings)

        for key, value in built.items():
            setattr(application.state, key, value)

        await built["store"].initialize()

        backfilled = 0
        if app_config.get("catalog", {}).get("backfill_on_startup", True):
            backfilled = await built["maintainer"].start()

        _logger.info(
            "app_startup",
            version=__version__,
            environment=app_settings.app_env,
            match_level=app_settings.match_level.name.lower(),
            backfilled=backfilled,
        )

        yield

        events: CatalogEvents | None = built.get("events")
        if events is not None:
            await events.drain()

        http_client: httpx.AsyncClient | None = built.get("http_client")
        if http_client is not None:
            await http_client.aclose()
        _logger.info("app_shutdown", message="HTTP client closed")

    application = FastAPI(
        title="jutsudex API",
        version=__version__,
        description=(
            "Look up ninja techniques by exact, punctuation-insensitive or "
            "homophone name, search the catalog and play technique audio."
        ),
        lifespan=_lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(
        application,
        allowed_origins=app_config.get("api", {}).get("cors_origins"),
    )

    application.include_router(api_router)
    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "jutsudex.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
