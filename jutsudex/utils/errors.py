"""Custom exception hierarchy for jutsudex.

All application exceptions inherit from :class:`JutsudexError`, which
carries an optional ``provider_name`` so error handlers can identify which
collaborator (e.g. "sqlite_entry_store", "catalog", "pypinyin") caused the
failure.

    JutsudexError  (base -- catch-all for any jutsudex error)
    +-- EntryStoreError     (entry store query / write failure)
    +-- CatalogFetchError   (remote catalog or audio listing failure)
    +-- PhoneticError       (phonetic provider failure)
    +-- ConfigurationError  (startup / missing or invalid config)

A miss during resolution or an empty search is *not* an error: the resolver
returns ``None`` and the search aggregator returns a result whose
``total_count`` is zero.  A phonetic provider that is merely unavailable is
not an error either; the tier strategy table downgrades instead.
"""


class JutsudexError(Exception):
    """Base exception for all jutsudex errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name``.  ``__str__`` prefixes the provider name in brackets
    for log output, e.g. ``[catalog] HTTP 503``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Collaborator errors
# ---------------------------------------------------------------------------

class EntryStoreError(JutsudexError):
    """Raised when the entry store fails to execute a query or write."""

    def __init__(
        self,
        message: str = "Entry store operation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class CatalogFetchError(JutsudexError):
    """Raised when the remote technique catalog cannot be fetched or decoded."""

    def __init__(
        self,
        message: str = "Catalog fetch failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class PhoneticError(JutsudexError):
    """Raised when an available phonetic provider fails to convert a string."""

    def __init__(
        self,
        message: str = "Phonetic conversion failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(JutsudexError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
