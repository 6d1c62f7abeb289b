"""Artwork records exchanged between the store, the renderers and the API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ArtworkLink:
    """Short reference to another artwork (remix parent or child)."""

    id: str
    author: str
    title: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "author": self.author, "title": self.title}


@dataclass
class Artwork:
    """A stored indexed-colour artwork.

    Content is immutable once created; only ``views`` changes, and only
    through the store's atomic increment.
    """

    id: str
    author: str
    size: int
    palette: list[str]
    pixels: list[list[int]]
    title: str | None = None
    created_at: str = ""
    """ISO-8601 UTC timestamp."""
    views: int = 0
    remix_of: str | None = None

    original: ArtworkLink | None = None
    """Parent artwork, filled in by the gallery service on a full fetch."""
    remixes: list[ArtworkLink] = field(default_factory=list)
    """Most recent remixes, filled in by the gallery service on a full fetch."""

    @property
    def display_title(self) -> str:
        return self.title or "Untitled"

    def to_dict(self, *, with_links: bool = False) -> dict[str, Any]:
        """JSON representation served by the API."""
        data: dict[str, Any] = {
            "id": self.id,
            "author": self.author,
            "title": self.title,
            "size": self.size,
            "palette": list(self.palette),
            "pixels": [list(row) for row in self.pixels],
            "created_at": self.created_at,
            "views": self.views,
            "remix_of": self.remix_of or None,
        }
        if with_links:
            data["original"] = self.original.to_dict() if self.original else None
            data["remixes"] = [link.to_dict() for link in self.remixes]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Artwork:
        """Build an artwork from its JSON form (e.g. a local ``.json`` file)."""
        return cls(
            id=str(data.get("id", "")),
            author=data.get("author", ""),
            title=data.get("title"),
            size=data.get("size", 0),
            palette=data.get("palette", []),
            pixels=data.get("pixels", []),
            created_at=str(data.get("created_at", "") or ""),
            views=int(data.get("views", 0) or 0),
            remix_of=data.get("remix_of"),
        )
