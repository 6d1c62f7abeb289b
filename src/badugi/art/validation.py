"""Structural checks for submitted artworks.

The ``validate_*`` predicates are pure and only answer yes or no.
``check_submission`` runs them in order and raises
:class:`~badugi.art.errors.ArtworkValidationError` with the reason of the
first failure, before anything is written.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import Any

from badugi.art.errors import ArtworkValidationError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")

MAX_PALETTE_LENGTH = 256
MAX_AUTHOR_LENGTH = 64
MAX_TITLE_LENGTH = 128


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def _is_int(value: Any) -> bool:
    # bool is an int subclass but never a palette index
    return isinstance(value, int) and not isinstance(value, bool)


def is_hex_color(value: Any) -> bool:
    """True for a ``#RRGGBB`` string (hex digits in either case)."""
    return isinstance(value, str) and _HEX_COLOR_RE.fullmatch(value) is not None


def validate_palette(palette: Any, max_length: int = MAX_PALETTE_LENGTH) -> bool:
    """True iff *palette* is a list of 1..*max_length* ``#RRGGBB`` strings."""
    if not isinstance(palette, list) or not 1 <= len(palette) <= max_length:
        return False
    return all(is_hex_color(colour) for colour in palette)


def validate_pixels(pixels: Any, size: int, palette_length: int) -> bool:
    """True iff *pixels* is a *size* x *size* grid of indices into the palette.

    A single malformed row or out-of-range index rejects the whole grid.
    """
    if not isinstance(pixels, list) or len(pixels) != size:
        return False
    for row in pixels:
        if not isinstance(row, list) or len(row) != size:
            return False
        for index in row:
            if not _is_int(index) or index < 0 or index >= palette_length:
                return False
    return True


def validate_size(size: Any, allowed: Iterable[int]) -> bool:
    """True iff *size* is an integer in the configured *allowed* set."""
    return _is_int(size) and size in set(allowed)


def validate_author(author: Any, max_length: int = MAX_AUTHOR_LENGTH) -> bool:
    """Authors are required, non-empty strings."""
    return isinstance(author, str) and 0 < len(author) <= max_length


def validate_title(title: Any, max_length: int = MAX_TITLE_LENGTH) -> bool:
    """Titles are optional; an empty or missing title is accepted."""
    if title is None or title == "":
        return True
    return isinstance(title, str) and len(title) <= max_length


# ---------------------------------------------------------------------------
# Submission check
# ---------------------------------------------------------------------------


def check_submission(
    *,
    author: Any,
    title: Any,
    size: Any,
    palette: Any,
    pixels: Any,
    allowed_sizes: Iterable[int],
    max_author_length: int = MAX_AUTHOR_LENGTH,
    max_title_length: int = MAX_TITLE_LENGTH,
    max_palette_length: int = MAX_PALETTE_LENGTH,
) -> None:
    """Raise :class:`ArtworkValidationError` on the first failing check.

    Order: author, title, size, palette, pixels.  The pixel check depends on
    a valid size and palette, so it always runs last.
    """
    allowed = sorted(set(allowed_sizes))

    if not validate_author(author, max_author_length):
        raise ArtworkValidationError(
            f"Invalid author (string, max {max_author_length} chars)"
        )

    if not validate_title(title, max_title_length):
        raise ArtworkValidationError(
            f"Invalid title (string, max {max_title_length} chars)"
        )

    if not validate_size(size, allowed):
        choices = ", ".join(f"{s} ({s}x{s} pixels)" for s in allowed)
        raise ArtworkValidationError(f"Size must be one of {choices}")

    if not validate_palette(palette, max_palette_length):
        raise ArtworkValidationError(
            f"Invalid palette. Must be array of 1-{max_palette_length} hex colors (#RRGGBB)"
        )

    if not validate_pixels(pixels, size, len(palette)):
        raise ArtworkValidationError(
            f"Invalid pixels. Must be {size}x{size} array of palette indices"
        )

    logger.debug("Submission by %r passed structural checks (%dx%d).", author, size, size)
