"""Tests for the SQLite artwork store."""

from __future__ import annotations

import threading
from pathlib import Path

import pytest

from badugi.storage.gallery import ArtStore
from tests.conftest import BLACK_WHITE, solid


def _insert(store: ArtStore, author: str = "ada", **overrides) -> str:
    fields = {
        "author": author,
        "title": "Night",
        "size": 8,
        "palette": list(BLACK_WHITE),
        "pixels": solid(8),
    }
    fields.update(overrides)
    return store.insert(**fields).id


class TestArtStore:
    def test_insert_and_get(self, store: ArtStore) -> None:
        art_id = _insert(store, pixels=[[(x + y) % 2 for x in range(8)] for y in range(8)])
        art = store.get(art_id)
        assert art is not None
        assert art.author == "ada"
        assert art.size == 8
        assert art.palette == BLACK_WHITE
        assert art.pixels[0][:3] == [0, 1, 0]
        assert art.views == 0
        assert art.remix_of is None
        assert art.created_at

    def test_empty_title_stored_as_null(self, store: ArtStore) -> None:
        art_id = _insert(store, title="")
        assert store.get(art_id).title is None

    def test_get_unknown(self, store: ArtStore) -> None:
        assert store.get("missing") is None
        assert store.exists("missing") is False

    def test_increment_views(self, store: ArtStore) -> None:
        art_id = _insert(store)
        assert store.increment_views(art_id) == 1
        assert store.increment_views(art_id) == 2
        assert store.get(art_id).views == 2

    def test_increment_unknown(self, store: ArtStore) -> None:
        assert store.increment_views("missing") is None

    def test_concurrent_increments_are_not_lost(self, store: ArtStore) -> None:
        art_id = _insert(store)

        def hit() -> None:
            for _ in range(25):
                store.increment_views(art_id)

        threads = [threading.Thread(target=hit) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert store.get(art_id).views == 200

    def test_remix_links(self, store: ArtStore) -> None:
        parent = _insert(store, author="bob")
        first = _insert(store, author="cy", remix_of=parent)
        second = _insert(store, author="di", remix_of=parent)
        remixes = store.remixes_of(parent)
        assert [link.id for link in remixes] == [second, first]
        assert store.link(first).author == "cy"
        assert store.remixes_of(first) == []

    def test_remixes_limit(self, store: ArtStore) -> None:
        parent = _insert(store)
        for _ in range(12):
            _insert(store, remix_of=parent)
        assert len(store.remixes_of(parent, limit=10)) == 10

    def test_list_newest_first_with_paging(self, store: ArtStore) -> None:
        ids = [_insert(store, author=f"a{n}") for n in range(5)]
        page = store.list_art(limit=2, offset=1)
        assert [art.id for art in page] == [ids[3], ids[2]]

    def test_list_and_count_by_author(self, store: ArtStore) -> None:
        _insert(store, author="ada")
        _insert(store, author="bob")
        _insert(store, author="ada")
        assert [art.author for art in store.list_art(author="ada")] == ["ada", "ada"]
        assert store.count(author="ada") == 2
        assert store.count() == 3

    def test_persists_across_connections(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "gallery.db"
        first = ArtStore(db_path=path)
        art_id = _insert(first)
        first.close()

        second = ArtStore(db_path=path)
        try:
            assert second.get(art_id) is not None
        finally:
            second.close()

    def test_in_memory(self) -> None:
        mem = ArtStore(db_path=":memory:")
        try:
            art_id = _insert(mem)
            assert mem.exists(art_id)
        finally:
            mem.close()

    def test_to_dict_shape(self, store: ArtStore) -> None:
        art = store.get(_insert(store))
        data = art.to_dict()
        assert set(data) == {
            "id", "author", "title", "size", "palette", "pixels",
            "created_at", "views", "remix_of",
        }
        assert set(art.to_dict(with_links=True)) >= {"original", "remixes"}


@pytest.fixture()
def store(tmp_path: Path):
    art_store = ArtStore(db_path=tmp_path / "store.db")
    yield art_store
    art_store.close()
