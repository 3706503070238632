"""Grid snapping and golden-ratio spacing."""

import math

from slidelayout.engine.data_models import Rectangle
from slidelayout.engine.units import GRID_SIZE

GOLDEN_RATIO = 1.618


def snap_to_grid(value: float, grid_size: int = GRID_SIZE) -> float:
    """Snap a coordinate to the nearest grid line.

    Halfway values round up, so snap_to_grid(20) == 24 with the 8pt grid.

    Args:
        value: Coordinate in points.
        grid_size: Grid unit in points.

    Returns:
        Nearest multiple of grid_size.
    """
    return math.floor(value / grid_size + 0.5) * grid_size


def snap_rect_to_grid(rect: Rectangle, grid_size: int = GRID_SIZE) -> Rectangle:
    """Snap position and size of a rectangle to the grid."""
    return Rectangle(
        x=snap_to_grid(rect.x, grid_size),
        y=snap_to_grid(rect.y, grid_size),
        width=snap_to_grid(rect.width, grid_size),
        height=snap_to_grid(rect.height, grid_size),
    )


def golden_ratio_spacing(base_size: float, grid_size: int = GRID_SIZE) -> float:
    """Spacing of base_size x phi, snapped to the grid.

    Args:
        base_size: Usually the font size of the element above the gap.
        grid_size: Grid unit in points.

    Returns:
        Spacing in points.
    """
    return snap_to_grid(base_size * GOLDEN_RATIO, grid_size)


def vertical_gap(font_size: float, grid_size: int = GRID_SIZE) -> float:
    """Gap below an auto-stacked element. Bigger text gets more room."""
    return golden_ratio_spacing(font_size, grid_size)
