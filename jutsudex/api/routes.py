"""FastAPI routes for the jutsudex catalog.

Service dependencies are resolved from ``app.state`` via FastAPI's
``Depends`` using the ``Annotated`` pattern.

# ─── API ROUTE MAP ────────────────────────────────────────────────────
#
# Endpoint                        Method  Description
# ─────────────────────────────────────────────────────────────────────
# /api/v1/entries/{name}          GET     Resolve a technique, with page URL
# /api/v1/entries/{name}/audio    GET     Resolve, then pick a random clip
# /api/v1/search                  GET     Priority-merged keyword search
# /api/v1/catalog/update          POST    Refresh the store from upstream
# /api/v1/catalog                 DELETE  Remove every stored entry
# /api/v1/health                  GET     Health check + provider status
#
# A lookup miss is a 404 whose detail is the localized not-found line,
# plus search suggestions when search_on_failed is set;
# a search with no hits is a normal 200 with total_count = 0.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from jutsudex import __version__
from jutsudex.api.schemas import (
    ClearResponse,
    EntryResponse,
    EntrySummary,
    HealthResponse,
    NotFoundResponse,
    ReleaseResponse,
    SearchResponse,
    UpdateResponse,
)
from jutsudex.services.catalog_service import CatalogService, ReleaseStatus
from jutsudex.services.output_formatter import MessageFormatter


router = APIRouter(prefix="/api/v1")


# ---------------------------------------------------------------------------
# Dependency injection helpers, resolved from app.state
# ---------------------------------------------------------------------------


def _get_catalog_service(request: Request) -> CatalogService:
    """Return the catalog service from application state."""
    return request.app.state.catalog_service


def _get_formatter(request: Request) -> MessageFormatter:
    """Return the message formatter from application state."""
    return request.app.state.formatter


CatalogDep = Annotated[CatalogService, Depends(_get_catalog_service)]
FormatterDep = Annotated[MessageFormatter, Depends(_get_formatter)]

_NOT_FOUND = {404: {"model": NotFoundResponse}}


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


async def _not_found(name: str, service: CatalogService, formatter: MessageFormatter) -> JSONResponse:
    """404 for a lookup miss, with a search for the same text when configured."""
    suggestions: list[EntrySummary] = []
    if service.settings.search_on_failed:
        result = await service.search(name)
        suggestions = [EntrySummary.from_entry(e) for e in result.entries]

    body = NotFoundResponse(detail=formatter.text("common.not_found"), suggestions=suggestions)
    return JSONResponse(status_code=404, content=body.model_dump())


@router.get(
    "/entries/{name}",
    response_model=EntryResponse,
    responses=_NOT_FOUND,
    summary="Resolve a technique by name",
)
async def get_entry(
    name: str, service: CatalogDep, formatter: FormatterDep
) -> EntryResponse | JSONResponse:
    lookup = await service.lookup(name)
    if lookup.entry is None:
        return await _not_found(name, service, formatter)

    return EntryResponse(
        query=name,
        id=lookup.entry.id,
        name=lookup.entry.name,
        description=lookup.entry.description,
        url=lookup.url or "",
    )


@router.get(
    "/entries/{name}/audio",
    response_model=ReleaseResponse,
    responses=_NOT_FOUND,
    summary="Pick a random audio clip for a technique",
)
async def get_entry_audio(
    name: str, service: CatalogDep, formatter: FormatterDep
) -> ReleaseResponse | JSONResponse:
    """Resolve *name* and return one of its audio clips.

    Both outcomes that produce nothing to play are 404s; the detail
    distinguishes an unknown technique from one without audio.
    """
    outcome = await service.release(name)
    if outcome.status is ReleaseStatus.NOT_FOUND:
        return await _not_found(name, service, formatter)
    if outcome.status is ReleaseStatus.NO_AUDIO:
        raise HTTPException(status_code=404, detail=formatter.text("release.no_audio"))

    return ReleaseResponse(
        query=name,
        id=outcome.entry.id,
        name=outcome.entry.name,
        audio_url=outcome.audio_url,
    )


@router.get("/search", response_model=SearchResponse, summary="Search techniques")
async def search_entries(
    service: CatalogDep,
    keyword: Annotated[str, Query(description="Substring to look for")],
    limit: Annotated[int | None, Query(ge=1, description="Display limit")] = None,
) -> SearchResponse:
    effective_limit = service.settings.search_limit if limit is None else limit
    result = await service.search(keyword, effective_limit)
    return SearchResponse(
        keyword=keyword,
        limit=effective_limit,
        total_count=result.total_count,
        truncated=result.truncated,
        entries=[EntrySummary.from_entry(e) for e in result.entries],
    )


# ---------------------------------------------------------------------------
# Catalog maintenance
# ---------------------------------------------------------------------------


@router.post("/catalog/update", response_model=UpdateResponse, summary="Refresh the catalog")
async def update_catalog(service: CatalogDep) -> UpdateResponse:
    total = await service.update_catalog()
    return UpdateResponse(total=total)


@router.delete("/catalog", response_model=ClearResponse, summary="Remove every entry")
async def clear_catalog(service: CatalogDep) -> ClearResponse:
    removed = await service.clear_catalog()
    return ClearResponse(removed=removed)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@router.get("/health", response_model=HealthResponse, summary="Application health check")
async def health_check(request: Request) -> HealthResponse:
    """Return store size and provider availability.

    ``degraded`` means homophone matching is currently downgraded to
    normal because the phonetic provider is off.
    """
    providers: dict[str, Any] = {}
    if hasattr(request.app.state, "provider_registry"):
        providers = dict(request.app.state.provider_registry)

    entries = await request.app.state.store.count()
    status = "healthy" if providers.get("phonetic", False) else "degraded"

    return HealthResponse(
        status=status,
        version=__version__,
        entries=entries,
        providers=providers,
    )
