"""Pinyin phonetic provider implementing IPhoneticProvider.

Uses ``pypinyin`` to romanize Han characters without tone marks, then
joins the syllables and lowercases the result, so "火遁" and "祸盾" both
become "huodun".  Non-Han runs (Latin letters, digits) are passed through
unchanged by pypinyin and lowercased with the rest.
"""

from __future__ import annotations

import pypinyin
import structlog

from jutsudex.interfaces.phonetic_provider import IPhoneticProvider
from jutsudex.utils.errors import PhoneticError

logger = structlog.get_logger(logger_name=__name__)


class PinyinPhoneticProvider(IPhoneticProvider):
    """Tone-less pinyin keys via ``pypinyin.lazy_pinyin``.

    Parameters
    ----------
    enabled:
        Operator switch (``PHONETIC_ENABLED``).  A disabled provider reports
        itself unavailable, which makes homophone lookups fall back to the
        normal tier.
    """

    def __init__(self, enabled: bool = True) -> None:
        self._enabled = enabled
        logger.info("pinyin_provider_initialized", enabled=enabled)

    def phoneticize(self, normalized: str) -> str:
        """Return the lowercase tone-less pinyin key for *normalized*."""
        if not normalized:
            return ""
        try:
            syllables = pypinyin.lazy_pinyin(normalized, style=pypinyin.Style.NORMAL)
        except (TypeError, ValueError) as exc:
            raise PhoneticError(
                message=f"pinyin conversion failed for '{normalized}': {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        return "".join(syllables).lower()

    def is_available(self) -> bool:
        return self._enabled

    def get_provider_name(self) -> str:
        return "pypinyin"
