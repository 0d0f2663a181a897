"""Pydantic response schemas for the jutsudex API.

Every endpoint answers with one of these models; FastAPI validates and
serializes through ``response_model=...`` and documents them at ``/docs``.
Convention: response schemas end with "Response".
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from jutsudex.models.entry import Entry


class EntrySummary(BaseModel):
    """One technique as listed in search results."""

    id: int
    name: str
    description: str = ""

    @classmethod
    def from_entry(cls, entry: Entry) -> EntrySummary:
        return cls(id=entry.id, name=entry.name, description=entry.description)


class EntryResponse(BaseModel):
    """A resolved technique with its catalog page."""

    query: str
    id: int
    name: str
    description: str = ""
    url: str


class ReleaseResponse(BaseModel):
    """A resolved technique and one randomly chosen audio clip."""

    query: str
    id: int
    name: str
    audio_url: str


class SearchResponse(BaseModel):
    """Priority-merged search results.

    ``total_count`` counts every distinct match across tiers; ``entries``
    holds at most ``limit`` of them.
    """

    keyword: str
    limit: int = Field(ge=1)
    total_count: int = Field(ge=0)
    truncated: bool = False
    entries: list[EntrySummary] = Field(default_factory=list)


class UpdateResponse(BaseModel):
    """Catalog refresh result."""

    total: int = Field(ge=0, description="Total techniques reported by the remote catalog")


class ClearResponse(BaseModel):
    """Catalog wipe result."""

    removed: int = Field(ge=0)


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    entries: int = 0
    providers: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str | None = None


class NotFoundResponse(BaseModel):
    """404 body for a lookup miss.

    ``suggestions`` holds search results for the same text when
    ``search_on_failed`` is on; otherwise it is empty.
    """

    detail: str
    suggestions: list[EntrySummary] = Field(default_factory=list)
