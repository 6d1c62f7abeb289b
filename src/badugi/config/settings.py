"""Environment-driven application settings.

All values are loaded from environment variables (prefix ``BADUGI_``) or a
``.env`` file at the project root.

The canvas-size policy lives in ``BADUGI_CANVAS_SIZES``.  The default is the
single fixed 32x32 canvas; set ``BADUGI_CANVAS_SIZES='[8, 16, 32, 64]'`` to
accept the enumerated sizes instead.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CanvasSettings(BaseSettings):
    """Canvas, palette and rendering limits."""

    model_config = SettingsConfigDict(
        env_prefix="BADUGI_CANVAS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    sizes: list[int] = Field(default_factory=lambda: [32])
    """Allowed canvas sizes (side length in pixels)."""
    max_palette: int = Field(default=256, ge=1, le=256)
    remix_max_change_ratio: float = Field(default=0.5, gt=0.0, le=1.0)
    """Fraction of pixels a remix may change."""
    svg_target: int = Field(default=512, ge=1, le=8192)
    """Maximum side of the rendered SVG document."""

    @field_validator("sizes")
    @classmethod
    def _check_sizes(cls, value: list[int]) -> list[int]:
        if not value:
            raise ValueError("at least one canvas size must be allowed")
        if any(size < 1 for size in value):
            raise ValueError("canvas sizes must be positive")
        return sorted(set(value))


class ServerSettings(BaseSettings):
    """HTTP server binding."""

    model_config = SettingsConfigDict(
        env_prefix="BADUGI_SERVER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class Settings(BaseSettings):
    """Top-level settings aggregator."""

    model_config = SettingsConfigDict(
        env_prefix="BADUGI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    canvas: CanvasSettings = Field(default_factory=CanvasSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    db_path: Path = Path.home() / ".badugi" / "gallery.db"
    """SQLite database file holding the ``art`` table."""

    max_author_length: int = Field(default=64, ge=1)
    max_title_length: int = Field(default=128, ge=1)

    list_limit_default: int = Field(default=50, ge=1)
    list_limit_max: int = Field(default=100, ge=1)

    base_url: str = "http://localhost:3000"
    """Gallery server used by the ``submit`` and ``show`` CLI commands."""


# Module-level singleton; import and use directly.
settings = Settings()


def get_settings() -> Settings:
    """Return the module-level Settings singleton."""
    return settings
