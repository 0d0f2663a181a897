"""Text normalization utilities for technique names and descriptions.

Two concerns live here:

1. **Name normalization** -- :func:`normalize` strips every Unicode
   punctuation, symbol and separator code point so that "Fire-Style",
   "Fire Style!" and "Fire·Style" all collapse to "FireStyle".  It does
   NOT case-fold: "Water Jutsu" normalizes to "WaterJutsu", never
   "waterjutsu".  The stored ``normalized_name`` column and the ``NORMAL``
   match tier both rely on this exact transform.

2. **Description previews** -- :func:`description_preview` flattens a
   multi-line description onto one line and truncates it for search
   result listings.
"""

import unicodedata

# Unicode general-category major classes removed by normalize():
# P* (punctuation), S* (symbols), Z* (space, line and paragraph separators).
_STRIPPED_CATEGORY_CLASSES = frozenset("PSZ")

_ELLIPSIS = "…"


def _is_stripped(char: str) -> bool:
    return unicodedata.category(char)[0] in _STRIPPED_CATEGORY_CLASSES


def normalize(text: str) -> str:
    """Remove punctuation, symbols and separators from *text*.

    Code points are tested against their Unicode general category, so
    full-width CJK punctuation ("、", "！") and ideographic spaces
    are removed the same way ASCII ones are.  The relative order of the
    remaining code points is preserved.

    Note that control characters such as ``"\\n"`` and ``"\\t"`` are category
    ``Cc``, not ``Z*``, and are therefore kept.

    Args:
        text: Raw technique name or query.

    Returns:
        The normalized string (empty for empty input).
    """
    return "".join(char for char in text if not _is_stripped(char))


def description_preview(description: str, limit: int) -> str:
    """Build a single-line preview of *description*.

    Args:
        description: Full description text, possibly multi-line.
        limit: Maximum number of code points to keep.  ``0`` disables the
            preview and returns the description untouched.

    Returns:
        The description with newlines replaced by spaces, cut to *limit*
        code points and suffixed with an ellipsis when it was longer.
    """
    if not limit:
        return description

    flattened = description.replace("\n", " ")
    if len(flattened) <= limit:
        return flattened
    return flattened[:limit] + _ELLIPSIS
