"""Badugi — a small gallery for indexed-colour pixel art.

Validates palette-indexed submissions, enforces the remix change limit,
stores artworks in SQLite and renders them as ASCII, SVG and HTML.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
