"""HTTP surface of the gallery."""

from __future__ import annotations

from badugi.web.app import create_app

__all__ = ["create_app"]
