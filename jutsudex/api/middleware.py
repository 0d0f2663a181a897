"""HTTP middleware for the jutsudex API.

Three pieces, wired in ``main.create_app``:

- ``configure_cors``: origins come from ``api.cors_origins`` in
  ``config/config.yaml``.
- ``RequestLoggingMiddleware``: one ``http_request`` event per call.  It
  binds a short request id into structlog's context vars, so every event
  the resolver or the search logs while serving the call carries the same
  ``request_id``.  The id is echoed in the ``X-Request-ID`` header.
- ``ErrorHandlingMiddleware``: maps ``JutsudexError`` to a JSON
  ``ErrorResponse``.  An unreachable or malformed upstream catalog is a
  502, and any other application error (store, config) is a 500.

Starlette runs the last-added middleware first.  ``main`` adds error
handling before request logging, so the logged status is the mapped one.
"""

from __future__ import annotations

import time
import uuid

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from jutsudex.api.schemas import ErrorResponse
from jutsudex.utils.errors import CatalogFetchError, JutsudexError
from jutsudex.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def configure_cors(app: FastAPI, *, allowed_origins: list[str] | None = None) -> None:
    """Allow browser front-ends on *allowed_origins* (default: any) to call the API.

    The API is read-mostly and carries no cookies, so credentials stay off.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins or ["*"],
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag the request with an id, then log method, path, status and duration."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        start = time.perf_counter()
        response: Response | None = None

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            try:
                response = await call_next(request)
                response.headers[REQUEST_ID_HEADER] = request_id
                return response
            finally:
                _logger.info(
                    "http_request",
                    method=request.method,
                    path=request.url.path,
                    query=request.url.query or None,
                    status=response.status_code if response else 500,
                    duration_ms=round((time.perf_counter() - start) * 1000, 2),
                )


def status_for(exc: JutsudexError) -> int:
    if isinstance(exc, CatalogFetchError):
        return 502
    return 500


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Turn ``JutsudexError`` into ``{"error": <class>, "detail": <message>}``.

    The provider tag stays in the server log; clients only see the class
    name and message.  Anything that is not a ``JutsudexError`` is left to
    FastAPI's default 500 handler.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except JutsudexError as exc:
            status_code = status_for(exc)
            log = _logger.warning if status_code == 502 else _logger.error
            log(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                provider=exc.provider_name,
                path=request.url.path,
                status=status_code,
            )
            body = ErrorResponse(error=type(exc).__name__, detail=exc.message)
            return JSONResponse(status_code=status_code, content=body.model_dump())
