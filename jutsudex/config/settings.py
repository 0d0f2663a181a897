"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# Values are read from two sources, in priority order:
#
#   1. **Environment variables** - e.g., MATCH_LEVEL=homophone
#   2. **.env file** - key=value lines in the project root .env file
#
# Field `search_limit` maps to env var `SEARCH_LIMIT` (case-insensitive).
# Defaults below apply when neither source sets a field.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jutsudex.models.entry import MatchTier


class Settings(BaseSettings):
    """jutsudex application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Catalog source ===
    source_url: str = "https://wsfrs.com"
    http_timeout: float = Field(default=30.0, gt=0)

    # === Matching ===
    # Loosest tier tried by lookups and searches: strict | normal | homophone
    # (or 0 | 1 | 2).
    match_level: MatchTier = MatchTier.NORMAL
    search_limit: int = Field(default=10, ge=1)
    # 0 disables description previews in search listings.
    description_preview_limit: int = Field(default=10, ge=0)
    # Follow a failed lookup with a search for the same text.
    search_on_failed: bool = True
    # Operator switch for the pinyin provider; off means homophone lookups
    # behave like normal ones.
    phonetic_enabled: bool = True

    # === Storage ===
    catalog_db_path: str = "data/catalog.db"

    # === Messages ===
    locale: str = "zh-CN"

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"

    @field_validator("match_level", mode="before")
    @classmethod
    def _parse_match_level(cls, value: object) -> MatchTier:
        return MatchTier.parse(value)  # type: ignore[arg-type]
