"""FastAPI application — JSON API plus SVG, ASCII and HTML views.

Routes
------
GET  /api/art              List artworks (newest first).
GET  /api/art/{id}         Artwork JSON with remix links; counts a view.
POST /api/art              Submit an artwork or a remix.
GET  /api/art/{id}/ascii   Plain-text ASCII rendering.
GET  /art/{id}/image       SVG rendering.
GET  /art/{id}             HTML page; counts a view.
GET  /remix/{id}           Whether an artwork can be remixed.
GET  /health               Liveness and the active canvas-size policy.
"""

from __future__ import annotations

import logging
import re
import sqlite3
from typing import Any

from fastapi import Body, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response

from badugi import __version__
from badugi.art.errors import ArtworkError, ArtworkValidationError
from badugi.service import GalleryService

logger = logging.getLogger(__name__)

_LEADING_INT_RE = re.compile(r"\s*[-+]?\d+")


def _is_api(request: Request) -> bool:
    return request.url.path.startswith("/api/")


def _query_int(value: str | None) -> int | None:
    """Leading integer of a query value, or None when there is none."""
    if value is None:
        return None
    match = _LEADING_INT_RE.match(value)
    return int(match.group()) if match else None


def get_service(request: Request) -> GalleryService:
    return request.app.state.service


def create_app(service: GalleryService | None = None) -> FastAPI:
    """Build the application around a gallery service.

    Without an explicit *service*, one is created over the default store.
    """
    if service is None:
        from badugi.storage.gallery import get_art_store

        service = GalleryService(get_art_store())

    app = FastAPI(title="Badugi", version=__version__)
    app.state.service = service
    app.add_middleware(
        CORSMiddleware,
        allow_origins=service.settings.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ------------------------------------------------------------------
    # Error mapping
    # ------------------------------------------------------------------

    @app.exception_handler(ArtworkError)
    async def _artwork_error(request: Request, exc: ArtworkError) -> Response:
        if _is_api(request):
            return JSONResponse(
                {"success": False, "error": exc.reason}, status_code=exc.status_code
            )
        return PlainTextResponse(exc.reason, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def _bad_request(request: Request, exc: RequestValidationError) -> Response:
        logger.debug("Malformed request to %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            {"success": False, "error": "Invalid request"}, status_code=400
        )

    @app.exception_handler(sqlite3.Error)
    async def _database_error(request: Request, exc: sqlite3.Error) -> Response:
        logger.exception("Database error on %s %s", request.method, request.url.path)
        if _is_api(request):
            return JSONResponse(
                {"success": False, "error": "Database error"}, status_code=500
            )
        return PlainTextResponse("Error loading art", status_code=500)

    # ------------------------------------------------------------------
    # JSON API
    # ------------------------------------------------------------------

    @app.get("/api/art")
    def list_art(
        limit: str | None = Query(None),
        offset: str | None = Query(None),
        author: str | None = Query(None),
        gallery: GalleryService = Depends(get_service),
    ) -> dict[str, Any]:
        items, total = gallery.list_art(
            limit=_query_int(limit), offset=_query_int(offset), author=author
        )
        return {
            "success": True,
            "count": len(items),
            "total": total,
            "art": [art.to_dict() for art in items],
        }

    @app.get("/api/art/{art_id}")
    def get_art(art_id: str, gallery: GalleryService = Depends(get_service)) -> dict[str, Any]:
        art = gallery.view(art_id)
        return {"success": True, "art": art.to_dict(with_links=True)}

    @app.post("/api/art", status_code=201)
    def create_art(
        payload: Any = Body(...),
        gallery: GalleryService = Depends(get_service),
    ) -> dict[str, Any]:
        if not isinstance(payload, dict):
            raise ArtworkValidationError("Request body must be a JSON object")
        art = gallery.create(payload)
        return {
            "success": True,
            "message": "Remix published!" if art.remix_of else "Art created!",
            "id": art.id,
            "url": f"/art/{art.id}",
            "remix_of": art.remix_of,
        }

    @app.get("/api/art/{art_id}/ascii", response_class=PlainTextResponse)
    def get_ascii(art_id: str, gallery: GalleryService = Depends(get_service)) -> str:
        return gallery.ascii(art_id)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @app.get("/art/{art_id}/image")
    def get_svg(art_id: str, gallery: GalleryService = Depends(get_service)) -> Response:
        return Response(gallery.svg(art_id), media_type="image/svg+xml")

    @app.get("/art/{art_id}", response_class=HTMLResponse)
    def get_page(art_id: str, gallery: GalleryService = Depends(get_service)) -> str:
        return gallery.page(art_id)

    @app.get("/remix/{art_id}")
    def get_remix(art_id: str, gallery: GalleryService = Depends(get_service)) -> dict[str, Any]:
        gallery.require(art_id)
        return {"success": True, "id": art_id}

    @app.get("/health")
    def health(gallery: GalleryService = Depends(get_service)) -> dict[str, Any]:
        return {"status": "ok", "canvas_sizes": gallery.settings.canvas.sizes}

    return app
