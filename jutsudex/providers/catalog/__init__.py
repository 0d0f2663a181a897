"""Remote catalog sources.

HttpCatalogSource reads technique listings and audio clips from the public
catalog API through a shared ``httpx.AsyncClient``.
"""

from jutsudex.providers.catalog.http_catalog_source import HttpCatalogSource

__all__ = ["HttpCatalogSource"]
