"""GalleryClient — talk to a running Badugi server over HTTP.

Uses httpx.  Every non-2xx answer raises :class:`GalleryAPIError` with the
server's ``error`` text when the body carries one.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class GalleryAPIError(Exception):
    """The gallery answered with an error status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class GalleryClient:
    """Thin synchronous client for the gallery API.

    Parameters
    ----------
    base_url:
        Server root, e.g. ``http://localhost:3000``.
    timeout:
        Per-request timeout in seconds.
    transport:
        Optional httpx transport (tests pass an ``httpx.MockTransport``).
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 15.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if base_url is None:
            from badugi.config.settings import get_settings

            base_url = get_settings().base_url
        self._client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def __enter__(self) -> GalleryClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        resp = self._client.request(method, path, **kwargs)
        if resp.is_success:
            return resp

        message = resp.text
        try:
            body = resp.json()
            if isinstance(body, dict) and body.get("error"):
                message = str(body["error"])
        except ValueError:
            pass
        logger.debug("Gallery %s %s failed: %d %s", method, path, resp.status_code, message)
        raise GalleryAPIError(resp.status_code, message)

    # ------------------------------------------------------------------
    # API
    # ------------------------------------------------------------------

    def list_art(
        self, limit: int | None = None, offset: int | None = None, author: str | None = None
    ) -> dict[str, Any]:
        params = {
            key: value
            for key, value in {"limit": limit, "offset": offset, "author": author}.items()
            if value is not None
        }
        return self._request("GET", "/api/art", params=params).json()

    def get_art(self, art_id: str) -> dict[str, Any]:
        """Fetch one artwork (counts a view on the server)."""
        return self._request("GET", f"/api/art/{art_id}").json()["art"]

    def create_art(
        self,
        *,
        author: str,
        size: int,
        palette: list[str],
        pixels: list[list[int]],
        title: str | None = None,
        remix_of: str | None = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "author": author,
            "title": title,
            "size": size,
            "palette": palette,
            "pixels": pixels,
        }
        if remix_of:
            payload["remix_of"] = remix_of
        return self._request("POST", "/api/art", json=payload).json()

    def get_ascii(self, art_id: str) -> str:
        return self._request("GET", f"/api/art/{art_id}/ascii").text

    def get_svg(self, art_id: str) -> str:
        return self._request("GET", f"/art/{art_id}/image").text
