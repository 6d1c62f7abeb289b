"""Renderers — ASCII, SVG and HTML views of a stored artwork.

Every function here is pure: it reads the artwork and returns text.  None of
them check their input; render only artworks that passed
:func:`badugi.art.validation.check_submission`.
"""

from __future__ import annotations

import html
import json
import math
from string import Template
from xml.sax.saxutils import escape

import numpy as np

from badugi.art.colour import palette_brightness
from badugi.art.models import Artwork

# ---------------------------------------------------------------------------
# ASCII
# ---------------------------------------------------------------------------

ASCII_RAMP = " .:-=+*#%@"
"""Density ramp from emptiest (darkest) to fullest (brightest)."""


def ascii_levels(palette: list[str], ramp: str = ASCII_RAMP) -> np.ndarray:
    """Ramp index for each palette colour: ``floor(brightness * (len(ramp) - 1))``."""
    brightness = palette_brightness(palette)
    return np.floor(brightness * (len(ramp) - 1)).astype(np.int64)


def render_ascii(art: Artwork, ramp: str = ASCII_RAMP) -> str:
    """One character per pixel, one line per row, rows joined by ``\\n``."""
    levels = ascii_levels(art.palette, ramp)
    chars = [ramp[level] for level in levels.tolist()]
    return "\n".join("".join(chars[index] for index in row) for row in art.pixels)


# ---------------------------------------------------------------------------
# SVG
# ---------------------------------------------------------------------------

SVG_TARGET = 512


def svg_scale(size: int, target: int = SVG_TARGET) -> int:
    """Integer side of one pixel square; never below 1."""
    return max(1, math.floor(target / size))


def render_svg(art: Artwork, target: int = SVG_TARGET) -> str:
    """Square SVG document tiling one ``<rect>`` per pixel, row-major."""
    scale = svg_scale(art.size, target)
    canvas = art.size * scale

    rects: list[str] = []
    for y in range(art.size):
        row = art.pixels[y]
        for x in range(art.size):
            colour = art.palette[row[x]]
            rects.append(
                f'<rect x="{x * scale}" y="{y * scale}" width="{scale}" '
                f'height="{scale}" fill="{colour}"/>'
            )

    caption = escape(f"{art.display_title} by {art.author}")
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{canvas}" height="{canvas}" '
        f'viewBox="0 0 {canvas} {canvas}" shape-rendering="crispEdges">\n'
        f"  <title>{caption}</title>\n"
        f"  {''.join(rects)}\n"
        "</svg>"
    )


# ---------------------------------------------------------------------------
# HTML
# ---------------------------------------------------------------------------

_PAGE = Template("""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>$page_title — Badugi</title>
  <style>
    * { box-sizing: border-box; margin: 0; padding: 0; }
    body { font-family: 'Monaco', 'Menlo', monospace; background: #0a0a0f; color: #e0e0e0; padding: 2rem; }
    .container { max-width: 800px; margin: 0 auto; }
    .back, .remix-info a, .remixes a, .actions a { color: #4ecdc4; text-decoration: none; }
    .art-frame { background: #16161e; border-radius: 8px; padding: 1.5rem; margin: 1.5rem 0; }
    .canvas { display: grid; grid-template-columns: repeat($size, 1fr); width: min(100%, 512px); aspect-ratio: 1; margin: 0 auto 1rem; }
    .pixel { aspect-ratio: 1; }
    .meta { color: #888; font-size: 0.9rem; }
    .meta .author { color: #ff6b6b; }
    .meta .title { color: #fff; font-weight: bold; }
    .stats { margin-top: 1rem; font-size: 0.8rem; color: #666; }
    .remix-info { margin-top: 1rem; padding: 0.75rem; background: #1a1a2e; border-radius: 4px; font-size: 0.85rem; }
    .palette { display: flex; gap: 0.5rem; flex-wrap: wrap; margin-top: 1rem; }
    .palette-color { width: 24px; height: 24px; border-radius: 4px; border: 1px solid #333; }
    .actions { display: flex; gap: 1rem; flex-wrap: wrap; }
    .actions a { padding: 0.5rem 1rem; border: 1px solid #333; border-radius: 4px; font-size: 0.85rem; }
    .remixes { margin-top: 1.5rem; padding: 1rem; background: #16161e; border-radius: 8px; }
    .remixes h3 { font-size: 0.9rem; color: #888; margin-bottom: 0.75rem; }
    .remixes a { display: block; padding: 0.5rem; font-size: 0.85rem; }
  </style>
</head>
<body>
  <div class="container">
    <header><a href="/" class="back">← Back to Gallery</a></header>
    <div class="art-frame">
      <div class="canvas" id="canvas">$cells</div>
      <div class="meta">
        <span class="title">$title</span>
        <span>by <span class="author">$author</span></span>
      </div>
      <div class="stats">$size×$size · $views views · $created</div>
      $remix_info
      <div class="palette" id="palette">$swatches</div>
    </div>
    <div class="actions">
      <a href="/remix/$id" class="remix-btn">Remix</a>
      <a href="/art/$id/image" target="_blank">View SVG</a>
      <a href="/api/art/$id">View JSON</a>
      <a href="/api/art/$id/ascii">View ASCII</a>
    </div>
    $remixes
  </div>
  <script type="application/json" id="art-data">$data</script>
</body>
</html>""")


def _link_label(title: str | None, author: str) -> str:
    return f"{html.escape(title or 'Untitled')} by {html.escape(author)}"


def render_html(art: Artwork) -> str:
    """Standalone page for one artwork, including remix links.

    ``art.views`` is shown as-is; the caller passes the post-increment count.
    """
    cells = "".join(
        f'<div class="pixel" style="background-color:{art.palette[index]}"></div>'
        for row in art.pixels
        for index in row
    )
    swatches = "".join(
        f'<div class="palette-color" style="background-color:{colour}" title="{colour}"></div>'
        for colour in art.palette
    )

    remix_info = ""
    if art.original is not None:
        remix_info = (
            '<div class="remix-info">Remix of '
            f'<a href="/art/{html.escape(art.original.id)}">'
            f"{html.escape(art.original.title or 'Untitled')}</a> "
            f"by {html.escape(art.original.author)}</div>"
        )

    remixes = ""
    if art.remixes:
        links = "".join(
            f'<a href="/art/{html.escape(link.id)}">{_link_label(link.title, link.author)}</a>'
            for link in art.remixes
        )
        remixes = (
            f'<div class="remixes"><h3>Remixes ({len(art.remixes)})</h3>{links}</div>'
        )

    data = json.dumps({"palette": art.palette, "pixels": art.pixels}).replace("</", "<\\/")

    return _PAGE.substitute(
        page_title=_link_label(art.title, art.author),
        title=html.escape(art.display_title),
        author=html.escape(art.author),
        id=html.escape(art.id),
        size=art.size,
        views=art.views,
        created=html.escape(art.created_at[:10]),
        cells=cells,
        swatches=swatches,
        remix_info=remix_info,
        remixes=remixes,
        data=data,
    )

