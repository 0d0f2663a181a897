"""Tier strategy table: how each match tier builds its lookup key.

Every lookup tier is a pair of (key transform, indexed field):

    Tier        Transform                        Field
    ─────────────────────────────────────────────────────────────
    STRICT      identity                         name
    NORMAL      normalize                        normalized_name
    HOMOPHONE   phoneticize(normalize(s))        phonetic_name

``HOMOPHONE`` needs the phonetic capability.  When it is unavailable the
tier downgrades to the ``NORMAL`` strategy exactly, so a caller configured
for homophone matching still gets normal-quality matches instead of no
matches at all.

Everything here is pure: availability is a plain boolean argument, which
keeps the downgrade rule testable without any live provider.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass

from jutsudex.models.entry import EntryField, MatchTier
from jutsudex.utils.text_normalizer import normalize

KeyTransform = Callable[[str], str]


@dataclass(frozen=True)
class TierStrategy:
    """Key transform and indexed field for one match tier.

    ``tier`` is the tier actually applied, i.e. ``NORMAL`` for a downgraded
    ``HOMOPHONE`` request.
    """

    tier: MatchTier
    transform: KeyTransform
    field: EntryField

    def key_for(self, text: str) -> str:
        return self.transform(text)


def _identity(text: str) -> str:
    return text


_STRICT = TierStrategy(tier=MatchTier.STRICT, transform=_identity, field=EntryField.NAME)
_NORMAL = TierStrategy(tier=MatchTier.NORMAL, transform=normalize, field=EntryField.NORMALIZED_NAME)


def effective_tier(tier: MatchTier, phonetic_available: bool) -> MatchTier:
    """Return the tier actually applied for *tier* given phonetic availability."""
    if tier is MatchTier.HOMOPHONE and not phonetic_available:
        return MatchTier.NORMAL
    return tier


def strategy_for(
    tier: MatchTier,
    phonetic_available: bool,
    phoneticize: KeyTransform | None = None,
) -> TierStrategy:
    """Return the (transform, field) strategy for *tier*.

    Parameters
    ----------
    tier:
        Requested match tier.
    phonetic_available:
        Whether the phonetic capability can be used right now.
    phoneticize:
        The capability's conversion function; required only when a
        ``HOMOPHONE`` strategy is built with the capability available.

    Raises
    ------
    ValueError
        If the homophone strategy is requested as available but no
        *phoneticize* callable was supplied.
    """
    applied = effective_tier(tier, phonetic_available)

    if applied is MatchTier.STRICT:
        return _STRICT
    if applied is MatchTier.NORMAL:
        return _NORMAL

    if phoneticize is None:
        msg = "HOMOPHONE strategy requires a phoneticize callable when the capability is available"
        raise ValueError(msg)

    def _homophone_key(text: str) -> str:
        return phoneticize(normalize(text))

    return TierStrategy(
        tier=MatchTier.HOMOPHONE,
        transform=_homophone_key,
        field=EntryField.PHONETIC_NAME,
    )


def tiers_up_to(max_tier: MatchTier) -> Iterator[MatchTier]:
    """Yield tiers from ``STRICT`` to *max_tier* inclusive, strictest first."""
    for tier in MatchTier:
        if tier > max_tier:
            break
        yield tier


def strategies_up_to(
    max_tier: MatchTier,
    phonetic_available: bool,
    phoneticize: KeyTransform | None = None,
) -> list[TierStrategy]:
    """Build the strategy for every tier from ``STRICT`` to *max_tier*.

    A downgraded ``HOMOPHONE`` still gets its own (``NORMAL``) entry so the
    caller walks exactly one strategy per requested tier.
    """
    return [strategy_for(tier, phonetic_available, phoneticize) for tier in tiers_up_to(max_tier)]
