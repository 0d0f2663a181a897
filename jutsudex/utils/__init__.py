"""Utility modules for jutsudex.

- **errors** -- Exception hierarchy rooted at JutsudexError; collaborator
  adapters wrap library failures in a subclass tagged with their provider
  name.
- **logging** -- structlog setup with a dual renderer: coloured console
  output in development, structured JSON in production.
- **text_normalizer** -- Unicode punctuation/symbol/separator stripping for
  technique names, and description previews for search listings.
"""

# -- Domain exception hierarchy --------------------------------------------
from jutsudex.utils.errors import (
    CatalogFetchError,
    ConfigurationError,
    EntryStoreError,
    JutsudexError,
    PhoneticError,
)

# -- Structured logging setup ----------------------------------------------
from jutsudex.utils.logging import configure_logging, get_logger

# -- Text normalization -----------------------------------------------------
from jutsudex.utils.text_normalizer import description_preview, normalize

__all__ = [
    "CatalogFetchError",
    "ConfigurationError",
    "EntryStoreError",
    "JutsudexError",
    "PhoneticError",
    "configure_logging",
    "description_preview",
    "get_logger",
    "normalize",
]
