"""Badugi CLI — Typer-based entry point.

Commands
--------
serve       Run the gallery HTTP server.
validate    Check a local artwork JSON file (and optionally a remix parent).
ascii       Render a local artwork JSON file as ASCII.
svg         Render a local artwork JSON file as SVG.
submit      Post a local artwork JSON file to a running server.
show        Print the ASCII rendering of a stored artwork.
gallery     List the newest artworks on a running server.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from badugi.art.errors import ArtworkError
from badugi.art.models import Artwork
from badugi.art.remix import check_remix
from badugi.art.render import render_ascii, render_svg
from badugi.art.validation import check_submission
from badugi.config.settings import get_settings

app = typer.Typer(
    name="badugi",
    help="Badugi — indexed-colour pixel art gallery",
    add_completion=False,
)

console = Console(highlight=False)


def _setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(name)-30s  %(levelname)-7s  %(message)s",
    )


def _load(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        console.print(f"[bold red]Cannot read {path}:[/] {exc}")
        raise typer.Exit(2) from exc
    if not isinstance(data, dict):
        console.print(f"[bold red]{path} must hold a JSON object.[/]")
        raise typer.Exit(2)
    return data


def _check(data: dict[str, Any]) -> None:
    """Run the server's submission checks against a loaded file."""
    cfg = get_settings()
    check_submission(
        author=data.get("author"),
        title=data.get("title"),
        size=data.get("size"),
        palette=data.get("palette"),
        pixels=data.get("pixels"),
        allowed_sizes=cfg.canvas.sizes,
        max_author_length=cfg.max_author_length,
        max_title_length=cfg.max_title_length,
        max_palette_length=cfg.canvas.max_palette,
    )


def _reject(exc: ArtworkError, what: str = "") -> typer.Exit:
    prefix = f"{what}: " if what else ""
    console.print(f"[bold red]Rejected:[/] {prefix}{exc.reason}")
    return typer.Exit(1)


def _load_checked(path: Path, what: str = "") -> dict[str, Any]:
    """Load *path* and exit 1 unless it passes the submission checks."""
    data = _load(path)
    try:
        _check(data)
    except ArtworkError as exc:
        raise _reject(exc, what) from exc
    return data


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address."),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Run the gallery HTTP server."""
    _setup_logging(verbose)
    import uvicorn

    from badugi.web.app import create_app

    server = get_settings().server
    logging.getLogger(__name__).info(
        "Canvas sizes allowed: %s", ", ".join(str(s) for s in get_settings().canvas.sizes)
    )
    uvicorn.run(
        create_app(),
        host=host or server.host,
        port=port or server.port,
        log_level="debug" if verbose else "info",
    )


@app.command()
def validate(
    file: Path = typer.Argument(..., help="Artwork JSON file."),
    parent: Optional[Path] = typer.Option(
        None, "--parent", help="Parent artwork JSON file; applies the remix policy."
    ),
) -> None:
    """Check an artwork file the way the server checks a submission."""
    _setup_logging()
    data = _load_checked(file)

    if parent is not None:
        original = Artwork.from_dict(_load_checked(parent, "parent"))
        try:
            result = check_remix(
                original.palette,
                original.pixels,
                original.size,
                data["palette"],
                data["pixels"],
                data["size"],
                ratio=get_settings().canvas.remix_max_change_ratio,
            )
        except ArtworkError as exc:
            raise _reject(exc) from exc
        console.print(
            f"Remix changes {result.changed} of at most {result.max_allowed} pixels."
        )

    console.print("[bold green]OK[/]")


@app.command("ascii")
def ascii_command(file: Path = typer.Argument(..., help="Artwork JSON file.")) -> None:
    """Render a local artwork as ASCII."""
    typer.echo(render_ascii(Artwork.from_dict(_load_checked(file))))


@app.command()
def svg(
    file: Path = typer.Argument(..., help="Artwork JSON file."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to this file."),
) -> None:
    """Render a local artwork as SVG."""
    art = Artwork.from_dict(_load_checked(file))
    document = render_svg(art, target=get_settings().canvas.svg_target)
    if output is None:
        typer.echo(document)
    else:
        output.write_text(document, encoding="utf-8")
        console.print(f"Wrote {output}")


@app.command()
def submit(
    file: Path = typer.Argument(..., help="Artwork JSON file."),
    url: Optional[str] = typer.Option(None, "--url", help="Gallery server URL."),
) -> None:
    """Post an artwork to a running gallery."""
    _setup_logging()
    from badugi.client import GalleryAPIError, GalleryClient

    data = _load(file)
    with GalleryClient(url) as client:
        try:
            result = client.create_art(
                author=data.get("author"),
                title=data.get("title"),
                size=data.get("size"),
                palette=data.get("palette"),
                pixels=data.get("pixels"),
                remix_of=data.get("remix_of"),
            )
        except GalleryAPIError as exc:
            console.print(f"[bold red]Rejected ({exc.status_code}):[/] {exc.message}")
            raise typer.Exit(1) from exc

    console.print(f"[bold green]{result['message']}[/] {result['url']}")


@app.command()
def show(
    art_id: str = typer.Argument(..., help="Artwork id."),
    url: Optional[str] = typer.Option(None, "--url", help="Gallery server URL."),
) -> None:
    """Print the ASCII rendering of a stored artwork."""
    from badugi.client import GalleryAPIError, GalleryClient

    with GalleryClient(url) as client:
        try:
            text = client.get_ascii(art_id)
        except GalleryAPIError as exc:
            console.print(f"[bold red]{exc.message}[/]")
            raise typer.Exit(1) from exc
    typer.echo(text)


@app.command()
def gallery(
    limit: int = typer.Option(20, "--limit", "-n", help="Number of artworks."),
    author: Optional[str] = typer.Option(None, "--author", help="Only this author."),
    url: Optional[str] = typer.Option(None, "--url", help="Gallery server URL."),
) -> None:
    """List the newest artworks."""
    from badugi.client import GalleryAPIError, GalleryClient

    with GalleryClient(url) as client:
        try:
            page = client.list_art(limit=limit, author=author)
        except GalleryAPIError as exc:
            console.print(f"[bold red]{exc.message}[/]")
            raise typer.Exit(1) from exc

    if not page["art"]:
        console.print("No artworks.")
        return

    table = Table(title=f"{page['count']} of {page['total']} artworks")
    table.add_column("id", style="cyan", no_wrap=True)
    table.add_column("title")
    table.add_column("author", style="magenta")
    table.add_column("size", justify="right")
    table.add_column("views", justify="right")
    table.add_column("remix of", style="dim")
    for art in page["art"]:
        table.add_row(
            art["id"],
            art["title"] or "Untitled",
            art["author"],
            f"{art['size']}x{art['size']}",
            str(art["views"]),
            art["remix_of"] or "",
        )
    console.print(table)


def main() -> int:
    """Entry point for the ``badugi`` console script."""
    app()
    return 0
