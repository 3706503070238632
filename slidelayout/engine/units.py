"""
units.py — Point/EMU conversions and layout constants.

This is the foundation module. ALL geometry in the engine is expressed in
points (1pt = 1/72 inch). The presentation API speaks EMU, so rectangles
are converted only at the boundary, with Rectangle.to_emu().

EMU = English Metric Units (12700 EMUs per point)
"""

from pptx.util import Emu, Pt

# =============================================================================
# CANVAS DIMENSIONS (16:9 widescreen, 10" x 5.625")
# =============================================================================

DEFAULT_CANVAS_WIDTH_PT = 720.0
DEFAULT_CANVAS_HEIGHT_PT = 405.0

# =============================================================================
# UNIT CONVERSIONS
# =============================================================================

EMU_PER_PT = 12700


def pt_to_emu(pt: float) -> int:
    """Convert points to EMUs. Use this for all position/size output."""
    return int(Pt(pt))


def emu_to_pt(emu: int) -> float:
    """Convert EMUs to points."""
    return Emu(int(emu)).pt


# =============================================================================
# LAYOUT CONSTANTS (all in points)
# =============================================================================

# Minimum empty border between any element and the canvas edge
MARGIN = 20.0

# Smallest width/height an element may have
MIN_ELEMENT_SIZE = 10.0

# Default spacing between elements placed by the auto layout strategies
ELEMENT_GAP = 16.0

# Snap-to-grid unit
GRID_SIZE = 8

# Largest element that fits a default canvas (720 - 2 * 20)
MAX_ELEMENT_SIZE = 680.0

# =============================================================================
# FONT DEFAULTS
# =============================================================================

HEADLINE_FONT_SIZE_PT = 44
SUBTITLE_FONT_SIZE_PT = 24
BODY_FONT_SIZE_PT = 14
METRIC_FONT_SIZE_PT = 48

MIN_FONT_SIZE_PT = 10
MAX_FONT_SIZE_PT = 72

# =============================================================================
# COLOR DEFAULTS
# =============================================================================

MUTED_TEXT_COLOR = "#666666"

# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp a value between min and max."""
    return max(min_val, min(max_val, value))
