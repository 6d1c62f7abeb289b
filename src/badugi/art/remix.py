"""Remix comparison: how much of a parent artwork a remix changed.

Cells are compared by *resolved colour*: each grid's index is looked up in
its own palette first.  A remix may reorder or extend the palette, so equal
indices do not imply equal colours and vice versa.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from badugi.art.colour import palette_to_rgb
from badugi.art.errors import RemixPolicyError

logger = logging.getLogger(__name__)

DEFAULT_MAX_CHANGE_RATIO = 0.5


@dataclass(frozen=True)
class ChangeRatio:
    """Result of comparing a remix against its parent."""

    changed: int
    max_allowed: int

    @property
    def exceeds_limit(self) -> bool:
        return self.changed > self.max_allowed

    @property
    def is_noop(self) -> bool:
        return self.changed == 0


def resolve_colours(palette: Sequence[str], pixels: Sequence[Sequence[int]], size: int) -> np.ndarray:
    """Return the *size* x *size* array of 24-bit colours the grid displays.

    The grid must already have passed ``validate_pixels``; a grid of any
    other shape raises :class:`ValueError`.
    """
    grid = np.asarray(pixels, dtype=np.int64)
    if grid.shape != (size, size):
        raise ValueError(f"expected a {size}x{size} grid, got shape {grid.shape}")
    return palette_to_rgb(palette)[grid]


def max_changes(size: int, ratio: float = DEFAULT_MAX_CHANGE_RATIO) -> int:
    """Largest number of cells a remix of a *size* canvas may change."""
    return math.floor(size * size * ratio)


def compute_change_ratio(
    original_palette: Sequence[str],
    original_pixels: Sequence[Sequence[int]],
    new_palette: Sequence[str],
    new_pixels: Sequence[Sequence[int]],
    size: int,
    ratio: float = DEFAULT_MAX_CHANGE_RATIO,
) -> ChangeRatio:
    """Count the cells whose resolved colour differs between the two artworks."""
    before = resolve_colours(original_palette, original_pixels, size)
    after = resolve_colours(new_palette, new_pixels, size)
    changed = int(np.count_nonzero(before != after))
    return ChangeRatio(changed=changed, max_allowed=max_changes(size, ratio))


def check_remix(
    original_palette: Sequence[str],
    original_pixels: Sequence[Sequence[int]],
    original_size: int,
    new_palette: Sequence[str],
    new_pixels: Sequence[Sequence[int]],
    size: int,
    ratio: float = DEFAULT_MAX_CHANGE_RATIO,
) -> ChangeRatio:
    """Apply the remix policy, raising :class:`RemixPolicyError` on rejection.

    A remix keeps its parent's canvas size and changes at least one and at
    most ``floor(size * size * ratio)`` cells.
    """
    if original_size != size:
        raise RemixPolicyError(
            f"Remixes must keep the original size ({original_size}x{original_size} pixels)"
        )

    result = compute_change_ratio(
        original_palette, original_pixels, new_palette, new_pixels, size, ratio
    )

    if result.exceeds_limit:
        raise RemixPolicyError(
            f"Too many pixels changed. Remixes can only modify up to {ratio:.0%} "
            f"({result.max_allowed} pixels). You changed {result.changed}.",
            changed=result.changed,
            max_allowed=result.max_allowed,
        )

    if result.is_noop:
        raise RemixPolicyError(
            "No pixels changed. Make some modifications to remix!",
            changed=0,
            max_allowed=result.max_allowed,
        )

    logger.debug("Remix accepted: %d/%d cells changed.", result.changed, result.max_allowed)
    return result
