"""HTTP catalog source implementing ICatalogSource.

Reads the technique listing from the public catalog API:

    GET {base}/api/jutsus                 -> first page + pagination.total
    GET {base}/api/jutsus?limit={total}   -> every technique in one page
    GET {base}/api/jutsus/{id}/audios     -> audio clip URLs for one technique

The listing endpoint paginates, so the first request only exists to learn
the total; the second asks for exactly that many rows.

Uses an injected ``httpx.AsyncClient``; every transport, status or decode
failure is wrapped in CatalogFetchError.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from jutsudex.interfaces.catalog_source import ICatalogSource
from jutsudex.models.source import AudioListing, CatalogPage, SourceJutsu
from jutsudex.utils.errors import CatalogFetchError
from jutsudex.utils.logging import get_logger

_DEFAULT_TIMEOUT = 30.0


class HttpCatalogSource(ICatalogSource):
    """Remote technique catalog over HTTP.

    Parameters
    ----------
    base_url:
        Catalog site root, with or without a trailing slash.
    http_client:
        Injected ``httpx.AsyncClient`` for testability and connection pooling.
    timeout:
        Per-request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str,
        http_client: httpx.AsyncClient,
        timeout: float = _DEFAULT_TIMEOUT,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http_client
        self._timeout = timeout
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self._base_url}{path}"
        try:
            response = await self._http.get(url, params=params, timeout=self._timeout)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            raise CatalogFetchError(
                message=f"GET {url} returned HTTP {exc.response.status_code}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPError as exc:
            raise CatalogFetchError(
                message=f"GET {url} failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        except ValueError as exc:
            raise CatalogFetchError(
                message=f"GET {url} returned invalid JSON: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    def _parse(self, model: type[BaseModel], data: Any, what: str) -> Any:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise CatalogFetchError(
                message=f"unexpected {what} payload: {exc.error_count()} validation error(s)",
                provider_name=self.get_provider_name(),
            ) from exc

    # ------------------------------------------------------------------
    # ICatalogSource implementation
    # ------------------------------------------------------------------

    async def fetch_all(self) -> tuple[list[SourceJutsu], int]:
        """Fetch the whole technique listing in two requests."""
        first: CatalogPage = self._parse(
            CatalogPage, await self._get_json("/api/jutsus"), "catalog page"
        )
        total = first.pagination.total

        page: CatalogPage = self._parse(
            CatalogPage,
            await self._get_json("/api/jutsus", params={"limit": total}),
            "catalog page",
        )

        self._logger.info(
            "catalog_fetched",
            base_url=self._base_url,
            total=total,
            received=len(page.jutsus),
        )
        return list(page.jutsus), total

    async def fetch_audio_urls(self, entry_id: int) -> list[str]:
        listing: AudioListing = self._parse(
            AudioListing,
            await self._get_json(f"/api/jutsus/{entry_id}/audios"),
            "audio listing",
        )
        urls = [clip.audio_url for clip in listing.audios]
        self._logger.debug("audio_listing_fetched", entry_id=entry_id, clips=len(urls))
        return urls

    def entry_url(self, entry_id: int) -> str:
        return f"{self._base_url}/jutsus/{entry_id}"

    def get_provider_name(self) -> str:
        return "catalog"
