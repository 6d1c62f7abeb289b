"""Gallery service, the seam between HTTP routes, the checks and the store.

Submission runs every check before writing: structural validation first,
then (for remixes) parent lookup and the change-count policy.  Fetching a
single artwork for display counts one view through the store's atomic
increment.
"""

from __future__ import annotations

import logging
from typing import Any

from badugi.art.errors import ArtworkError, ArtworkNotFoundError, RemixPolicyError
from badugi.art.models import Artwork
from badugi.art.remix import check_remix
from badugi.art.render import render_ascii, render_html, render_svg
from badugi.art.validation import check_submission
from badugi.config.settings import Settings, get_settings
from badugi.storage.gallery import ArtStore

logger = logging.getLogger(__name__)

REMIX_LINK_LIMIT = 10


class GalleryService:
    """Create, fetch and render artworks.

    Parameters
    ----------
    store:
        Artwork persistence.
    settings:
        Limits and canvas policy; defaults to the module-level settings.
    """

    def __init__(self, store: ArtStore, settings: Settings | None = None) -> None:
        self._store = store
        self._settings = settings or get_settings()

    @property
    def settings(self) -> Settings:
        return self._settings

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, payload: dict[str, Any]) -> Artwork:
        """Validate and store a submission.

        Raises
        ------
        ArtworkValidationError
            Malformed author, title, size, palette or pixels.
        RemixPolicyError
            Unknown parent, or a change count outside ``[1, max]``.
        """
        canvas = self._settings.canvas
        author = payload.get("author")
        title = payload.get("title")
        size = payload.get("size")
        palette = payload.get("palette")
        pixels = payload.get("pixels")
        remix_of = payload.get("remix_of") or None

        try:
            check_submission(
                author=author,
                title=title,
                size=size,
                palette=palette,
                pixels=pixels,
                allowed_sizes=canvas.sizes,
                max_author_length=self._settings.max_author_length,
                max_title_length=self._settings.max_title_length,
                max_palette_length=canvas.max_palette,
            )

            if remix_of is not None:
                parent = self._store.get(str(remix_of))
                if parent is None:
                    raise RemixPolicyError("Original art not found for remix")
                check_remix(
                    parent.palette,
                    parent.pixels,
                    parent.size,
                    palette,
                    pixels,
                    size,
                    ratio=canvas.remix_max_change_ratio,
                )
        except ArtworkError as exc:
            logger.info("Submission by %r rejected: %s", author, exc.reason)
            raise

        art = self._store.insert(
            author=author,
            title=title,
            size=size,
            palette=palette,
            pixels=pixels,
            remix_of=str(remix_of) if remix_of is not None else None,
        )
        logger.info(
            "Created %s %s by %r (%dx%d, %d colours).",
            "remix" if art.remix_of else "artwork",
            art.id,
            art.author,
            art.size,
            art.size,
            len(art.palette),
        )
        return art

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get(self, art_id: str) -> Artwork:
        """Look up an artwork without counting a view."""
        art = self._store.get(art_id)
        if art is None:
            raise ArtworkNotFoundError(art_id)
        return art

    def require(self, art_id: str) -> None:
        """Raise :class:`ArtworkNotFoundError` unless the artwork exists."""
        if not self._store.exists(art_id):
            raise ArtworkNotFoundError(art_id)

    def view(self, art_id: str) -> Artwork:
        """Fetch an artwork for display, count the view and attach remix links."""
        art = self.get(art_id)

        views = self._store.increment_views(art_id)
        if views is not None:
            art.views = views

        if art.remix_of:
            art.original = self._store.link(art.remix_of)
        art.remixes = self._store.remixes_of(art.id, limit=REMIX_LINK_LIMIT)
        return art

    def list_art(
        self,
        limit: int | None = None,
        offset: int | None = None,
        author: str | None = None,
    ) -> tuple[list[Artwork], int]:
        """Return one newest-first page and the total matching count.

        A missing or non-positive *limit* falls back to the default page
        size; larger values are capped.
        """
        page = limit if limit and limit > 0 else self._settings.list_limit_default
        page = min(page, self._settings.list_limit_max)
        start = max(offset or 0, 0)

        items = self._store.list_art(limit=page, offset=start, author=author or None)
        return items, self._store.count(author=author or None)

    # ------------------------------------------------------------------
    # Render
    # ------------------------------------------------------------------

    def ascii(self, art_id: str) -> str:
        return render_ascii(self.get(art_id))

    def svg(self, art_id: str) -> str:
        return render_svg(self.get(art_id), target=self._settings.canvas.svg_target)

    def page(self, art_id: str) -> str:
        """HTML page for an artwork; counts one view."""
        return render_html(self.view(art_id))
