"""
data_models.py — Shared data models used by the engine, constraints and cache.

All lengths are in points unless the name says otherwise. Models are frozen
pydantic models: a value returned by the engine is never mutated afterwards,
callers derive new values with model_copy(update=...).
"""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .units import DEFAULT_CANVAS_HEIGHT_PT, DEFAULT_CANVAS_WIDTH_PT, pt_to_emu


# =============================================================================
# GEOMETRY
# =============================================================================

class Rectangle(BaseModel):
    """Axis-aligned rectangle in points."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(description="Left edge in points")
    y: float = Field(description="Top edge in points")
    width: float = Field(description="Width in points")
    height: float = Field(description="Height in points")

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    def overlaps(self, other: "Rectangle") -> bool:
        """True when both axis projections intersect. Touching edges do not count."""
        return not (
            self.right <= other.x
            or other.right <= self.x
            or self.bottom <= other.y
            or other.bottom <= self.y
        )

    def to_emu(self) -> "EmuRect":
        """Convert to the presentation API's native unit."""
        return EmuRect(
            x=pt_to_emu(self.x),
            y=pt_to_emu(self.y),
            width=pt_to_emu(self.width),
            height=pt_to_emu(self.height),
        )


class EmuRect(BaseModel):
    """Rectangle in EMUs, ready for a createShape/updatePageElementTransform request."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    width: int
    height: int


class BoxSize(BaseModel):
    """Width/height pair produced by the text estimator."""

    model_config = ConfigDict(frozen=True)

    width: float
    height: float


class CanvasSize(BaseModel):
    """Size of the slide the elements are placed on."""

    model_config = ConfigDict(frozen=True)

    width: float = DEFAULT_CANVAS_WIDTH_PT
    height: float = DEFAULT_CANVAS_HEIGHT_PT


DEFAULT_CANVAS = CanvasSize()


class ClampOutcome(BaseModel):
    """Result of validating a rectangle against a canvas."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    width: float
    height: float
    was_clamped: bool = False
    warnings: Tuple[str, ...] = ()
    original_bounds: Rectangle

    @property
    def rect(self) -> Rectangle:
        return Rectangle(x=self.x, y=self.y, width=self.width, height=self.height)


# =============================================================================
# STYLE
# =============================================================================

class ContentPreset(str, Enum):
    """Semantic role inferred for a piece of text."""

    TITLE = "title"
    SUBTITLE = "subtitle"
    BODY = "body"
    METRIC = "metric"
    BULLET = "bullet"


class TextAlignment(str, Enum):
    """Paragraph alignment, named as the presentation API names it."""

    START = "START"
    CENTER = "CENTER"
    END = "END"
    JUSTIFIED = "JUSTIFIED"


class PresetStyle(BaseModel):
    """Default text styling for a content preset."""

    model_config = ConfigDict(frozen=True)

    font_size: float
    bold: bool
    alignment: TextAlignment
    color: Optional[str] = None  # Hex, None keeps the theme color


# =============================================================================
# DOCUMENT METADATA
# =============================================================================

class LayoutRef(BaseModel):
    """A layout or master page of a presentation."""

    model_config = ConfigDict(frozen=True)

    object_id: str
    name: Optional[str] = None


class CachedCanvasEntry(BaseModel):
    """Snapshot of a document's canvas metadata. Replaced wholesale, never patched."""

    model_config = ConfigDict(frozen=True)

    dimensions: CanvasSize
    layouts: Tuple[LayoutRef, ...] = ()
    masters: Tuple[LayoutRef, ...] = ()
    timestamp: float


# =============================================================================
# PLACEMENT INPUT / OUTPUT
# =============================================================================

class TextBoxSpec(BaseModel):
    """One text item of a placement request. Every field but text is optional."""

    model_config = ConfigDict(frozen=True)

    text: str
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    font_size: Optional[float] = None
    bold: Optional[bool] = None
    alignment: Optional[TextAlignment] = None
    color: Optional[str] = None
    font_family: Optional[str] = None


class PlacedTextBox(BaseModel):
    """Final placement of a text item."""

    model_config = ConfigDict(frozen=True)

    index: int
    text: str
    preset: ContentPreset
    style: PresetStyle
    font_family: Optional[str] = None
    bounds: ClampOutcome
    emu: EmuRect
    recommended_y: float
    auto_stacked: bool = False
    overflowed: bool = False
    style_applied: bool = False


class PlacedElement(BaseModel):
    """Final placement of a shape or image."""

    model_config = ConfigDict(frozen=True)

    bounds: ClampOutcome
    emu: EmuRect
