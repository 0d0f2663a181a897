"""Catalog refresh notifications with callback-based listeners.

# ─── HOW CATALOG EVENTS WORK ──────────────────────────────────────────
#
# Observer pattern, one event type, no payload:
#
#   CatalogService ──notify_refreshed()──→ CatalogEvents ──callback()──→ PhoneticIndexMaintainer
#                                                         ──→ (any other listener)
#
#   - Sync callbacks run inline, in registration order
#   - Async callbacks are scheduled as tasks; the ingest returns without
#     waiting for them.  drain() waits for whatever is still running
#   - Listener errors are logged and skipped: the ingest that fired the
#     event has already committed and must still report success
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Callable

import structlog

from jutsudex.utils.logging import get_logger


class CatalogEvents:
    """Broadcasts "catalog refreshed" to registered listeners."""

    def __init__(self) -> None:
        self._listeners: list[Callable[[], object]] = []
        self._pending: set[asyncio.Future] = set()
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def subscribe(self, callback: Callable[[], object]) -> None:
        """Register *callback* (sync or async, no arguments)."""
        if callback not in self._listeners:
            self._listeners.append(callback)
            self._logger.debug("listener_registered", total_listeners=len(self._listeners))

    def unsubscribe(self, callback: Callable[[], object]) -> None:
        """Remove a previously registered callback (no-op if absent)."""
        if callback in self._listeners:
            self._listeners.remove(callback)
            self._logger.debug("listener_unregistered", remaining_listeners=len(self._listeners))

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    @property
    def pending_count(self) -> int:
        """Async listeners scheduled by a notification and not finished yet."""
        return len(self._pending)

    async def notify_refreshed(self) -> None:
        """Invoke every listener in registration order without waiting on async ones."""
        for callback in list(self._listeners):
            try:
                result = callback()
            except Exception as exc:
                self._log_failure(callback, exc)
                continue

            if asyncio.iscoroutine(result):
                task = asyncio.ensure_future(result)
                self._pending.add(task)
                task.add_done_callback(functools.partial(self._on_listener_done, callback))

    async def drain(self) -> None:
        """Wait until every scheduled listener has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _on_listener_done(self, callback: Callable[[], object], task: asyncio.Future) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self._log_failure(callback, exc)

    def _log_failure(self, callback: Callable[[], object], exc: BaseException) -> None:
        self._logger.warning(
            "listener_callback_error",
            event="catalog_refreshed",
            error=str(exc),
            callback=getattr(callback, "__name__", repr(callback)),
        )
