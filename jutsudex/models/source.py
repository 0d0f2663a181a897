"""Pydantic models for the remote technique catalog payloads.

The catalog API returns camelCase JSON; these models validate it on the way
in so the rest of the code never touches raw dicts.

    GET /api/jutsus[?limit=N]     -> CatalogPage
    GET /api/jutsus/{id}/audios   -> AudioListing
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SourceJutsu(BaseModel):
    """One technique as served by the remote catalog."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int = Field(gt=0)
    name: str
    description: str = ""


class Pagination(BaseModel):
    model_config = ConfigDict(extra="ignore")

    total: int = Field(ge=0)


class CatalogPage(BaseModel):
    """A page of the technique listing plus the overall total."""

    model_config = ConfigDict(extra="ignore")

    jutsus: list[SourceJutsu] = Field(default_factory=list)
    pagination: Pagination


class AudioClip(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    audio_url: str = Field(alias="audioUrl")


class AudioListing(BaseModel):
    """Audio clips recorded for a single technique."""

    model_config = ConfigDict(extra="ignore")

    audios: list[AudioClip] = Field(default_factory=list)
