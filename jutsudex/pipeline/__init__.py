"""Event plumbing between catalog ingest and its background jobs."""

from jutsudex.pipeline.catalog_events import CatalogEvents

__all__ = ["CatalogEvents"]
