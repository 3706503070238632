"""Constraint helpers - bounds, snapping, alignment and text fitting."""

from slidelayout.constraints.bounds import (
    clamp_bounds,
    clamp_preserving_aspect_ratio,
    fit_dimensions_with_aspect_ratio,
    is_within_bounds,
)
from slidelayout.constraints.snapping import (
    GOLDEN_RATIO,
    golden_ratio_spacing,
    snap_rect_to_grid,
    snap_to_grid,
    vertical_gap,
)
from slidelayout.constraints.alignment import (
    AlignType,
    align_elements,
    bounding_box,
    center_in_region,
    distribute_evenly,
    overlap_area,
)
from slidelayout.constraints.text_fitting import (
    DensityReport,
    body_font_size,
    split_text_to_slides,
    title_font_size,
    unescape_text,
    validate_text_density,
    wrap_text,
)

__all__ = [
    # Bounds
    "clamp_bounds",
    "clamp_preserving_aspect_ratio",
    "fit_dimensions_with_aspect_ratio",
    "is_within_bounds",
    # Snapping
    "GOLDEN_RATIO",
    "golden_ratio_spacing",
    "snap_rect_to_grid",
    "snap_to_grid",
    "vertical_gap",
    # Alignment
    "AlignType",
    "align_elements",
    "bounding_box",
    "center_in_region",
    "distribute_evenly",
    "overlap_area",
    # Text fitting
    "DensityReport",
    "body_font_size",
    "split_text_to_slides",
    "title_font_size",
    "unescape_text",
    "validate_text_density",
    "wrap_text",
]
