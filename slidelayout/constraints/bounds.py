"""Bounds validation: keep every element on the canvas.

Out-of-range geometry is never an error here. Each adjustment is applied in a
fixed order and described in ClampOutcome.warnings so the caller (or the agent
behind it) can be told what moved.
"""

from slidelayout.engine.data_models import DEFAULT_CANVAS, CanvasSize, ClampOutcome, Rectangle
from slidelayout.engine.units import MARGIN, MIN_ELEMENT_SIZE


def _fmt(value: float) -> str:
    return f"{value:g}"


def _size_ceiling(canvas_dimension: float, margin: float, min_size: float) -> float:
    """Largest size allowed on an axis. Floored at min_size for tiny canvases."""
    return max(canvas_dimension - margin * 2, min_size)


def _clamp_position(
    value: float,
    size: float,
    canvas_dimension: float,
    margin: float,
) -> float:
    """Clamp a position into [margin, canvas - size - margin]. The lower bound wins."""
    return max(margin, min(value, canvas_dimension - size - margin))


def _clamp_positions(
    x: float,
    y: float,
    width: float,
    height: float,
    canvas: CanvasSize,
    margin: float,
    warnings: list[str],
) -> tuple[float, float]:
    new_x = _clamp_position(x, width, canvas.width, margin)
    if new_x != x:
        warnings.append(f"X position clamped from {_fmt(x)}pt to {_fmt(new_x)}pt")

    new_y = _clamp_position(y, height, canvas.height, margin)
    if new_y != y:
        warnings.append(f"Y position clamped from {_fmt(y)}pt to {_fmt(new_y)}pt")

    return new_x, new_y


def clamp_bounds(
    x: float,
    y: float,
    width: float,
    height: float,
    canvas: CanvasSize = DEFAULT_CANVAS,
    margin: float = MARGIN,
    min_size: float = MIN_ELEMENT_SIZE,
) -> ClampOutcome:
    """Clamp a rectangle into the canvas, sizing each axis independently.

    Steps, in order:
        1. Width then height raised to min_size.
        2. Width then height lowered to canvas - 2 * margin.
        3. X then Y moved into [margin, canvas - size - margin].

    Args:
        x: Requested left edge.
        y: Requested top edge.
        width: Requested width.
        height: Requested height.
        canvas: Canvas to fit into.
        margin: Empty border kept around the canvas edge.
        min_size: Smallest width/height allowed.

    Returns:
        ClampOutcome with the adjusted rectangle and one warning per adjustment.
    """
    original = Rectangle(x=x, y=y, width=width, height=height)
    warnings: list[str] = []

    if width < min_size:
        warnings.append(f"Width clamped from {_fmt(width)}pt to {_fmt(min_size)}pt (minimum)")
        width = min_size
    if height < min_size:
        warnings.append(f"Height clamped from {_fmt(height)}pt to {_fmt(min_size)}pt (minimum)")
        height = min_size

    max_width = _size_ceiling(canvas.width, margin, min_size)
    max_height = _size_ceiling(canvas.height, margin, min_size)

    if width > max_width:
        warnings.append(f"Width clamped from {_fmt(width)}pt to {_fmt(max_width)}pt (canvas limit)")
        width = max_width
    if height > max_height:
        warnings.append(f"Height clamped from {_fmt(height)}pt to {_fmt(max_height)}pt (canvas limit)")
        height = max_height

    x, y = _clamp_positions(x, y, width, height, canvas, margin, warnings)

    return ClampOutcome(
        x=x,
        y=y,
        width=width,
        height=height,
        was_clamped=bool(warnings),
        warnings=tuple(warnings),
        original_bounds=original,
    )


def fit_dimensions_with_aspect_ratio(
    width: float,
    height: float,
    max_width: float,
    max_height: float,
) -> tuple[float, float, bool]:
    """Scale width and height together until both fit.

    Args:
        width: Current width (must be positive).
        height: Current height (must be positive).
        max_width: Width limit.
        max_height: Height limit.

    Returns:
        Tuple of (width, height, was_scaled).
    """
    scale = min(max_width / width, max_height / height, 1.0)
    if scale >= 1.0:
        return width, height, False
    return width * scale, height * scale, True


def clamp_preserving_aspect_ratio(
    x: float,
    y: float,
    width: float,
    height: float,
    canvas: CanvasSize = DEFAULT_CANVAS,
    margin: float = MARGIN,
    min_size: float = MIN_ELEMENT_SIZE,
) -> ClampOutcome:
    """Clamp a rectangle into the canvas without distorting it (images).

    Oversized rectangles shrink by the smaller of the two scale factors,
    undersized ones grow until both sides reach min_size. Only when a very
    thin rectangle cannot satisfy both limits is one axis clamped on its own,
    and a warning says so.
    """
    if width <= 0 or height <= 0:
        return clamp_bounds(x, y, width, height, canvas, margin, min_size)

    original = Rectangle(x=x, y=y, width=width, height=height)
    warnings: list[str] = []

    max_width = _size_ceiling(canvas.width, margin, min_size)
    max_height = _size_ceiling(canvas.height, margin, min_size)

    new_width, new_height, scaled = fit_dimensions_with_aspect_ratio(
        width, height, max_width, max_height
    )
    if scaled:
        warnings.append(
            f"Dimensions clamped from {_fmt(width)}x{_fmt(height)}pt to "
            f"{_fmt(new_width)}x{_fmt(new_height)}pt (preserving aspect ratio)"
        )
    width, height = new_width, new_height

    if width < min_size or height < min_size:
        scale = max(min_size / width, min_size / height)
        # Scaling can land a hair under the floor
        width = max(width * scale, min_size)
        height = max(height * scale, min_size)
        warnings.append(f"Dimensions scaled up to {_fmt(width)}x{_fmt(height)}pt (minimum size)")

    if width > max_width or height > max_height:
        width, height = min(width, max_width), min(height, max_height)
        warnings.append(
            f"Dimensions clamped to {_fmt(width)}x{_fmt(height)}pt (aspect ratio not preserved)"
        )

    x, y = _clamp_positions(x, y, width, height, canvas, margin, warnings)

    return ClampOutcome(
        x=x,
        y=y,
        width=width,
        height=height,
        was_clamped=bool(warnings),
        warnings=tuple(warnings),
        original_bounds=original,
    )


def is_within_bounds(
    rect: Rectangle,
    canvas: CanvasSize = DEFAULT_CANVAS,
    margin: float = MARGIN,
) -> bool:
    """True when rect sits fully inside the canvas margins."""
    return (
        rect.x >= margin
        and rect.y >= margin
        and rect.right <= canvas.width - margin
        and rect.bottom <= canvas.height - margin
    )
