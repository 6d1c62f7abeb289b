"""Artwork error taxonomy.

Every rejection the gallery can produce before touching storage is an
``ArtworkError``.  The ``reason`` is the human-readable text returned to the
client and ``status_code`` is the HTTP status the web layer answers with.
"""

from __future__ import annotations


class ArtworkError(Exception):
    """Base class for artwork rejections."""

    status_code: int = 400

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class ArtworkValidationError(ArtworkError):
    """Malformed author, title, size, palette or pixel grid."""


class RemixPolicyError(ArtworkError):
    """Remix parent missing, or the change count is outside the allowed range."""

    def __init__(self, reason: str, *, changed: int | None = None, max_allowed: int | None = None) -> None:
        super().__init__(reason)
        self.changed = changed
        self.max_allowed = max_allowed


class ArtworkNotFoundError(ArtworkError):
    """No artwork with the requested id."""

    status_code = 404

    def __init__(self, art_id: str, reason: str = "Art not found") -> None:
        super().__init__(reason)
        self.art_id = art_id
