"""Entry point for ``python -m badugi``."""

from __future__ import annotations


def main() -> int:
    """Bootstrap and run the Badugi CLI."""
    from badugi.cli import main as cli_main

    return cli_main()


if __name__ == "__main__":
    raise SystemExit(main())
