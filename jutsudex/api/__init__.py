"""jutsudex API layer: routes, schemas and middleware."""

from jutsudex.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from jutsudex.api.routes import router
from jutsudex.api.schemas import (
    ClearResponse,
    EntryResponse,
    EntrySummary,
    ErrorResponse,
    HealthResponse,
    NotFoundResponse,
    ReleaseResponse,
    SearchResponse,
    UpdateResponse,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "router",
    "ClearResponse",
    "EntryResponse",
    "EntrySummary",
    "ErrorResponse",
    "HealthResponse",
    "NotFoundResponse",
    "ReleaseResponse",
    "SearchResponse",
    "UpdateResponse",
]
