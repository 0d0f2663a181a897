"""Matching core and catalog services.

- **tier_strategy** -- per-tier key transform and indexed field, including
  the homophone-to-normal downgrade.
- **match_resolver** -- first-hit-wins single-entry resolution.
- **search_aggregator** -- multi-tier substring search, priority-merged.
- **phonetic_indexer** -- idempotent backfill of phonetic keys.
- **catalog_service** -- ingest, clear, lookup, release and search.
- **output_formatter** -- localized message rendering.
"""

from jutsudex.services.catalog_service import (
    CatalogService,
    EntryLookup,
    ReleaseOutcome,
    ReleaseStatus,
)
from jutsudex.services.match_resolver import TieredMatchResolver
from jutsudex.services.output_formatter import MessageFormatter
from jutsudex.services.phonetic_indexer import PhoneticIndexMaintainer
from jutsudex.services.search_aggregator import SearchAggregator
from jutsudex.services.tier_strategy import (
    TierStrategy,
    effective_tier,
    strategies_up_to,
    strategy_for,
    tiers_up_to,
)

__all__ = [
    "CatalogService",
    "EntryLookup",
    "MessageFormatter",
    "PhoneticIndexMaintainer",
    "ReleaseOutcome",
    "ReleaseStatus",
    "SearchAggregator",
    "TierStrategy",
    "TieredMatchResolver",
    "effective_tier",
    "strategies_up_to",
    "strategy_for",
    "tiers_up_to",
]
