"""HTTP tests for the FastAPI application."""

from __future__ import annotations

import sqlite3

from fastapi.testclient import TestClient

from badugi.service import GalleryService
from tests.conftest import solid, submission, with_changes


def _create(client: TestClient, **overrides) -> str:
    resp = client.post("/api/art", json=submission(**overrides))
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]


class TestCreateArt:
    def test_created(self, client: TestClient) -> None:
        resp = client.post("/api/art", json=submission())
        assert resp.status_code == 201
        body = resp.json()
        assert body["success"] is True
        assert body["message"] == "Art created!"
        assert body["url"] == f"/art/{body['id']}"
        assert body["remix_of"] is None

    def test_invalid_palette(self, client: TestClient) -> None:
        resp = client.post("/api/art", json=submission(palette=["#GGGGGG"]))
        assert resp.status_code == 400
        assert resp.json() == {
            "success": False,
            "error": "Invalid palette. Must be array of 1-256 hex colors (#RRGGBB)",
        }

    def test_invalid_pixels(self, client: TestClient) -> None:
        resp = client.post("/api/art", json=submission(pixels=solid(8)[:-1]))
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid pixels. Must be 8x8 array of palette indices"

    def test_float_index_rejected(self, client: TestClient) -> None:
        pixels = solid(8)
        pixels[0][0] = 0.5
        resp = client.post("/api/art", json=submission(pixels=pixels))
        assert resp.status_code == 400

    def test_body_must_be_object(self, client: TestClient) -> None:
        resp = client.post("/api/art", json=[1, 2, 3])
        assert resp.status_code == 400
        assert resp.json()["success"] is False

    def test_malformed_json(self, client: TestClient) -> None:
        resp = client.post(
            "/api/art", content=b"{not json", headers={"content-type": "application/json"}
        )
        assert resp.status_code == 400

    def test_remix_flow(self, client: TestClient) -> None:
        parent = _create(client)
        resp = client.post(
            "/api/art", json=submission(pixels=with_changes(solid(8), 32), remix_of=parent)
        )
        assert resp.status_code == 201
        assert resp.json()["message"] == "Remix published!"
        assert resp.json()["remix_of"] == parent

    def test_remix_too_many_changes(self, client: TestClient) -> None:
        parent = _create(client)
        resp = client.post("/api/art", json=submission(pixels=solid(8, 1), remix_of=parent))
        assert resp.status_code == 400
        assert resp.json()["error"] == (
            "Too many pixels changed. Remixes can only modify up to 50% (32 pixels). "
            "You changed 64."
        )

    def test_remix_missing_parent(self, client: TestClient) -> None:
        resp = client.post("/api/art", json=submission(remix_of="nope"))
        assert resp.status_code == 400
        assert resp.json()["error"] == "Original art not found for remix"


class TestGetArt:
    def test_get_counts_views(self, client: TestClient) -> None:
        art_id = _create(client)
        first = client.get(f"/api/art/{art_id}").json()["art"]
        second = client.get(f"/api/art/{art_id}").json()["art"]
        assert first["views"] == 1
        assert second["views"] == 2
        assert first["pixels"] == solid(8)
        assert first["original"] is None
        assert first["remixes"] == []

    def test_links(self, client: TestClient) -> None:
        parent = _create(client, author="bob")
        child = _create(client, pixels=with_changes(solid(8), 4), remix_of=parent)
        child_json = client.get(f"/api/art/{child}").json()["art"]
        assert child_json["remix_of"] == parent
        assert child_json["original"] == {"id": parent, "author": "bob", "title": "Night"}
        parent_json = client.get(f"/api/art/{parent}").json()["art"]
        assert parent_json["remixes"][0]["id"] == child

    def test_not_found(self, client: TestClient) -> None:
        resp = client.get("/api/art/missing")
        assert resp.status_code == 404
        assert resp.json() == {"success": False, "error": "Art not found"}


class TestListArt:
    def test_list(self, client: TestClient) -> None:
        _create(client, author="ada")
        _create(client, author="bob")
        body = client.get("/api/art").json()
        assert body["success"] is True
        assert body["count"] == 2
        assert body["total"] == 2
        assert body["art"][0]["author"] == "bob"

    def test_filter_and_limit(self, client: TestClient) -> None:
        for _ in range(3):
            _create(client, author="ada")
        _create(client, author="bob")
        body = client.get("/api/art", params={"author": "ada", "limit": 2}).json()
        assert body["count"] == 2
        assert body["total"] == 3
        assert {art["author"] for art in body["art"]} == {"ada"}

    def test_non_numeric_limit_uses_default(self, client: TestClient) -> None:
        for _ in range(3):
            _create(client)
        response = client.get("/api/art", params={"limit": "abc", "offset": "zz"})
        assert response.status_code == 200
        assert response.json()["count"] == 3

    def test_limit_with_trailing_text(self, client: TestClient) -> None:
        for _ in range(3):
            _create(client)
        body = client.get("/api/art", params={"limit": "2x"}).json()
        assert body["count"] == 2
        assert body["total"] == 3


class TestRenderRoutes:
    def test_ascii(self, client: TestClient) -> None:
        art_id = _create(client, pixels=with_changes(solid(8), 8))
        resp = client.get(f"/api/art/{art_id}/ascii")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/plain")
        lines = resp.text.split("\n")
        assert lines[0] == "@" * 8
        assert lines[1] == " " * 8
        assert len(lines) == 8

    def test_svg(self, client: TestClient) -> None:
        art_id = _create(client)
        resp = client.get(f"/art/{art_id}/image")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("image/svg+xml")
        assert resp.text.count("<rect ") == 64
        assert 'width="512"' in resp.text

    def test_page(self, client: TestClient) -> None:
        art_id = _create(client)
        resp = client.get(f"/art/{art_id}")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert "1 views" in resp.text
        assert client.get(f"/api/art/{art_id}").json()["art"]["views"] == 2

    def test_page_not_found_is_plain_text(self, client: TestClient) -> None:
        resp = client.get("/art/missing")
        assert resp.status_code == 404
        assert resp.text == "Art not found"

    def test_svg_not_found(self, client: TestClient) -> None:
        assert client.get("/art/missing/image").status_code == 404

    def test_remix_route(self, client: TestClient) -> None:
        art_id = _create(client)
        assert client.get(f"/remix/{art_id}").json() == {"success": True, "id": art_id}
        assert client.get("/remix/missing").status_code == 404


class TestMisc:
    def test_health_reports_policy(self, client: TestClient) -> None:
        assert client.get("/health").json() == {"status": "ok", "canvas_sizes": [8, 16, 32, 64]}

    def test_database_error(self, client: TestClient, service: GalleryService, monkeypatch) -> None:
        def broken(*args, **kwargs):
            raise sqlite3.OperationalError("disk I/O error")

        monkeypatch.setattr(service._store, "list_art", broken)
        resp = client.get("/api/art")
        assert resp.status_code == 500
        assert resp.json() == {"success": False, "error": "Database error"}
