"""Palette colour decoding."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np


def hex_to_rgb(colour: str) -> tuple[int, int, int]:
    """``'#1a2B3c'`` -> ``(26, 43, 60)``."""
    return int(colour[1:3], 16), int(colour[3:5], 16), int(colour[5:7], 16)


def palette_to_rgb(palette: Sequence[str]) -> np.ndarray:
    """Decode ``#RRGGBB`` strings into a 1D array of 24-bit integers."""
    return np.array([int(colour[1:7], 16) for colour in palette], dtype=np.int64)


def palette_brightness(palette: Sequence[str]) -> np.ndarray:
    """Per-colour brightness ``(R + G + B) / (3 * 255)``, in ``[0, 1]``."""
    channels = np.array([hex_to_rgb(colour) for colour in palette], dtype=np.float64)
    return channels.reshape(-1, 3).sum(axis=1) / (3 * 255)
