"""Persistent artwork store backed by SQLite.

One ``art`` table holds every artwork.  Palette and pixels are stored as JSON
text; ``remix_of`` references the parent row.  Content is written once and
never updated, except ``views``, which is only ever changed by the single
server-side ``views = views + 1`` statement in :meth:`ArtStore.increment_views`.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from badugi.art.models import Artwork, ArtworkLink

logger = logging.getLogger(__name__)

_COLUMNS = "id, author, title, size, palette, pixels, created_at, views, remix_of"


class ArtStore:
    """SQLite-backed artwork storage.

    Thread-safe: FastAPI runs sync endpoints on a worker pool, so every
    statement runs under one lock on a shared connection.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file, or ``":memory:"``.
    """

    def __init__(self, db_path: str | Path | None = None) -> None:
        if db_path is None:
            from badugi.config.settings import get_settings

            db_path = get_settings().db_path

        if str(db_path) == ":memory:":
            target = ":memory:"
        else:
            path = Path(db_path).expanduser()
            path.parent.mkdir(parents=True, exist_ok=True)
            target = str(path)

        self._db_path = target
        self._lock = threading.Lock()
        self._conn: sqlite3.Connection = sqlite3.connect(target, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._init_db()

    def _init_db(self) -> None:
        """Create the ``art`` table and its indexes if they don't exist."""
        with self._lock:
            self._conn.executescript("""
                CREATE TABLE IF NOT EXISTS art (
                    id TEXT PRIMARY KEY,
                    author TEXT NOT NULL,
                    title TEXT,
                    size INTEGER NOT NULL,
                    palette TEXT NOT NULL,
                    pixels TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    views INTEGER NOT NULL DEFAULT 0,
                    remix_of TEXT REFERENCES art(id)
                );

                CREATE INDEX IF NOT EXISTS idx_art_created ON art(created_at DESC);
                CREATE INDEX IF NOT EXISTS idx_art_author ON art(author);
                CREATE INDEX IF NOT EXISTS idx_art_remix ON art(remix_of);
            """)
            self._conn.commit()
        logger.debug("ArtStore: database ready at %s.", self._db_path)

    @staticmethod
    def _to_artwork(row: sqlite3.Row) -> Artwork:
        return Artwork(
            id=row["id"],
            author=row["author"],
            title=row["title"],
            size=row["size"],
            palette=json.loads(row["palette"]),
            pixels=json.loads(row["pixels"]),
            created_at=row["created_at"],
            views=row["views"],
            remix_of=row["remix_of"],
        )

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def insert(
        self,
        *,
        author: str,
        title: str | None,
        size: int,
        palette: list[str],
        pixels: list[list[int]],
        remix_of: str | None = None,
    ) -> Artwork:
        """Store a new artwork and return it with its generated id."""
        art = Artwork(
            id=str(uuid.uuid4()),
            author=author,
            title=title or None,
            size=size,
            palette=palette,
            pixels=pixels,
            created_at=datetime.now(tz=timezone.utc).isoformat(),
            views=0,
            remix_of=remix_of or None,
        )
        with self._lock:
            self._conn.execute(
                f"INSERT INTO art ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    art.id,
                    art.author,
                    art.title,
                    art.size,
                    json.dumps(art.palette),
                    json.dumps(art.pixels),
                    art.created_at,
                    art.views,
                    art.remix_of,
                ),
            )
            self._conn.commit()

        logger.debug("ArtStore: inserted %s (%dx%d, remix_of=%s).", art.id, size, size, art.remix_of)
        return art

    def increment_views(self, art_id: str) -> int | None:
        """Atomically add one view and return the new count.

        Returns ``None`` if no artwork has this id.
        """
        with self._lock:
            cursor = self._conn.execute(
                "UPDATE art SET views = views + 1 WHERE id = ?", (art_id,)
            )
            if cursor.rowcount == 0:
                return None
            self._conn.commit()
            row = self._conn.execute(
                "SELECT views FROM art WHERE id = ?", (art_id,)
            ).fetchone()
        return row["views"]

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get(self, art_id: str) -> Artwork | None:
        """Retrieve an artwork by id."""
        with self._lock:
            row = self._conn.execute(
                f"SELECT {_COLUMNS} FROM art WHERE id = ?", (art_id,)
            ).fetchone()
        return self._to_artwork(row) if row else None

    def exists(self, art_id: str) -> bool:
        with self._lock:
            row = self._conn.execute("SELECT 1 FROM art WHERE id = ?", (art_id,)).fetchone()
        return row is not None

    def link(self, art_id: str) -> ArtworkLink | None:
        """Return the ``{id, author, title}`` summary of an artwork."""
        with self._lock:
            row = self._conn.execute(
                "SELECT id, author, title FROM art WHERE id = ?", (art_id,)
            ).fetchone()
        return ArtworkLink(**dict(row)) if row else None

    def remixes_of(self, art_id: str, limit: int = 10) -> list[ArtworkLink]:
        """Most recent artworks whose remix parent is *art_id*."""
        with self._lock:
            rows = self._conn.execute(
                """SELECT id, author, title FROM art
                   WHERE remix_of = ?
                   ORDER BY created_at DESC, rowid DESC
                   LIMIT ?""",
                (art_id, limit),
            ).fetchall()
        return [ArtworkLink(**dict(row)) for row in rows]

    def list_art(self, limit: int = 50, offset: int = 0, author: str | None = None) -> list[Artwork]:
        """Newest-first page of artworks, optionally filtered by author."""
        query = f"SELECT {_COLUMNS} FROM art"
        params: list[Any] = []
        if author:
            query += " WHERE author = ?"
            params.append(author)
        query += " ORDER BY created_at DESC, rowid DESC LIMIT ? OFFSET ?"
        params.extend([limit, offset])

        with self._lock:
            rows = self._conn.execute(query, params).fetchall()
        return [self._to_artwork(row) for row in rows]

    def count(self, author: str | None = None) -> int:
        """Number of stored artworks, optionally filtered by author."""
        with self._lock:
            if author:
                row = self._conn.execute(
                    "SELECT COUNT(*) FROM art WHERE author = ?", (author,)
                ).fetchone()
            else:
                row = self._conn.execute("SELECT COUNT(*) FROM art").fetchone()
        return row[0]

    def close(self) -> None:
        """Close the SQLite connection."""
        with self._lock:
            self._conn.close()


# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------

_instance: ArtStore | None = None


def get_art_store() -> ArtStore:
    """Return the singleton ArtStore instance."""
    global _instance  # noqa: PLW0603
    if _instance is None:
        _instance = ArtStore()
    return _instance


def reset_art_store() -> None:
    """Reset the singleton (used in tests)."""
    global _instance  # noqa: PLW0603
    if _instance is not None:
        _instance.close()
    _instance = None
