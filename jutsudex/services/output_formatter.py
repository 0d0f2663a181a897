"""Localized text rendering for command output.

Message templates live in ``jutsudex/locales/<locale>.yaml`` as nested
mappings and are addressed by dotted keys (``"search.no_result"``).
Templates use ``str.format`` placeholders.

The CLI prints everything through this formatter; the HTTP API returns
structured JSON and uses it only for its ``detail`` strings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from jutsudex.models.entry import SearchResult
from jutsudex.services.catalog_service import EntryLookup
from jutsudex.utils.errors import ConfigurationError
from jutsudex.utils.text_normalizer import description_preview

_LOCALES_DIR = Path(__file__).resolve().parent.parent / "locales"


def available_locales() -> list[str]:
    """Return the locale codes that have a message file."""
    return sorted(p.stem for p in _LOCALES_DIR.glob("*.yaml"))


class MessageFormatter:
    """Renders localized messages.

    Parameters
    ----------
    locale:
        Locale code, e.g. ``"zh-CN"`` or ``"en-US"``.
    preview_limit:
        Description preview length for search listings (0 = full text).
    """

    def __init__(self, locale: str = "zh-CN", preview_limit: int = 10) -> None:
        self._locale = locale
        self._preview_limit = preview_limit
        self._messages = self._load(locale)

    @staticmethod
    def _load(locale: str) -> dict[str, Any]:
        path = _LOCALES_DIR / f"{locale}.yaml"
        if not path.exists():
            raise ConfigurationError(
                message=f"Unknown locale '{locale}'; available: {', '.join(available_locales())}",
            )
        with open(path, encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    @property
    def locale(self) -> str:
        return self._locale

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def text(self, key: str, **params: Any) -> str:
        """Render the template at dotted *key* with *params*.

        Raises
        ------
        KeyError
            If no template exists at *key*.
        """
        node: Any = self._messages
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                raise KeyError(f"No message '{key}' in locale '{self._locale}'")
            node = node[part]
        if not isinstance(node, str):
            raise KeyError(f"Message '{key}' in locale '{self._locale}' is not a template")
        return node.format(**params)

    def render_lookup(self, lookup: EntryLookup) -> str:
        """Render an info lookup (found body or the plain not-found line)."""
        if lookup.entry is None:
            return self.text("common.not_found")
        return self.text(
            "info.body",
            name=lookup.entry.name,
            description=lookup.entry.description,
            url=lookup.url or "",
        )

    def render_search(self, result: SearchResult) -> str:
        """Render a search result listing, or the no-result line when empty."""
        if result.is_empty:
            return self.text("search.no_result")

        lines = [self.text("search.title")]
        for entry in result.entries:
            lines.append(
                self.text(
                    "search.item",
                    name=entry.name,
                    description=description_preview(entry.description, self._preview_limit),
                )
            )
        if result.truncated:
            lines.append(self.text("search.more", total=result.total_count, shown=len(result.entries)))
        return "\n".join(lines)
