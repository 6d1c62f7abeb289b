"""Shared test fixtures for Badugi.

Provides grid builders, a throwaway SQLite store, a gallery service running
the enumerated canvas policy, and a FastAPI ``TestClient`` over it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

from badugi.config.settings import CanvasSettings, Settings
from badugi.service import GalleryService
from badugi.storage.gallery import ArtStore, reset_art_store
from badugi.web.app import create_app

BLACK_WHITE = ["#000000", "#FFFFFF"]

# ---------------------------------------------------------------------------
# Grid helpers
# ---------------------------------------------------------------------------


def solid(size: int, index: int = 0) -> list[list[int]]:
    """A *size* x *size* grid filled with one palette index."""
    return [[index] * size for _ in range(size)]


def with_changes(grid: list[list[int]], count: int, index: int = 1) -> list[list[int]]:
    """Copy of *grid* with the first *count* cells (row-major) set to *index*."""
    size = len(grid)
    out = [list(row) for row in grid]
    for n in range(count):
        out[n // size][n % size] = index
    return out


def submission(size: int = 8, **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "author": "ada",
        "title": "Night",
        "size": size,
        "palette": list(BLACK_WHITE),
        "pixels": solid(size),
    }
    payload.update(overrides)
    return payload


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings with the enumerated {8, 16, 32, 64} canvas policy."""
    return Settings(
        canvas=CanvasSettings(sizes=[8, 16, 32, 64]),
        db_path=tmp_path / "gallery.db",
    )


@pytest.fixture()
def store(settings: Settings):
    art_store = ArtStore(db_path=settings.db_path)
    yield art_store
    art_store.close()
    reset_art_store()


@pytest.fixture()
def service(store: ArtStore, settings: Settings) -> GalleryService:
    return GalleryService(store, settings)


@pytest.fixture()
def client(service: GalleryService):
    with TestClient(create_app(service)) as test_client:
        yield test_client
