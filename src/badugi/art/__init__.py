"""Artwork core: validation, remix comparison and rendering.

Everything in this package is pure and works on in-memory data; storage and
HTTP live in :mod:`badugi.storage` and :mod:`badugi.web`.
"""

from __future__ import annotations
