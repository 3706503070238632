"""
config.py — Engine configuration.

Uses pydantic-settings for type-safe environment variable handling.
Every field can be overridden with a SLIDELAYOUT_ prefixed variable,
e.g. SLIDELAYOUT_CACHE_TTL_SECONDS=60.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from slidelayout.engine.data_models import CanvasSize
from slidelayout.engine.units import (
    DEFAULT_CANVAS_HEIGHT_PT,
    DEFAULT_CANVAS_WIDTH_PT,
    ELEMENT_GAP,
    GRID_SIZE,
    MARGIN,
    MIN_ELEMENT_SIZE,
)


class LayoutSettings(BaseSettings):
    """Layout engine settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SLIDELAYOUT_",
        extra="ignore",
    )

    # Fallback canvas when the provider cannot tell us (points)
    canvas_width: float = Field(default=DEFAULT_CANVAS_WIDTH_PT, gt=0)
    canvas_height: float = Field(default=DEFAULT_CANVAS_HEIGHT_PT, gt=0)

    # Geometry
    margin: float = Field(default=MARGIN, ge=0)
    min_element_size: float = Field(default=MIN_ELEMENT_SIZE, gt=0)
    grid_size: int = Field(default=GRID_SIZE, gt=0)
    element_gap: float = Field(default=ELEMENT_GAP, ge=0)

    # Canvas metadata cache
    cache_ttl_seconds: float = Field(default=300.0, gt=0)

    # Canvas size provider (presentations REST API)
    provider_base_url: str = "https://slides.googleapis.com/v1"
    provider_access_token: Optional[str] = None
    provider_timeout_seconds: float = 10.0

    @property
    def default_canvas(self) -> CanvasSize:
        return CanvasSize(width=self.canvas_width, height=self.canvas_height)


@lru_cache()
def get_settings() -> LayoutSettings:
    """Get cached settings instance."""
    return LayoutSettings()
