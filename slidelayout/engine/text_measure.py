"""
text_measure.py — Estimate text size BEFORE placing it in a box.

The renderer is a remote service whose font metrics cannot be queried, so
text is measured with a character-count model instead of real glyphs:
- Width: longest line x font size x a generous average glyph width
- Height: (wrapped) line count x font size x line height
- Both padded for the text box's internal insets and inflated by a safety margin

The estimates are deliberately conservative: real rendering should never be
larger than the estimate. They WILL diverge from reality for unusual fonts,
non-Latin scripts and extreme letter-spacing. That is an accepted limitation
of measuring without a font engine.

Empty or whitespace-only text measures as zero. Nothing in here raises.
"""

import math
from typing import Optional

from .data_models import BoxSize
from .units import MAX_FONT_SIZE_PT, MIN_FONT_SIZE_PT

# =============================================================================
# ESTIMATION CONFIGURATION
# =============================================================================

# Average glyph width as a fraction of font size. Real fonts sit between
# 0.5 and 0.7, we take the top of the range.
AVG_CHAR_WIDTH_FACTOR = 0.7

# Tighter glyph width used when simulating word wrap
WRAP_CHAR_WIDTH_FACTOR = 0.65

# Lines break at word boundaries, not at arbitrary characters
WORD_BOUNDARY_FACTOR = 0.85

WIDTH_SAFETY_MARGIN = 0.2
HEIGHT_SAFETY_MARGIN = 0.2
WRAPPED_HEIGHT_SAFETY_MARGIN = 0.1

# Internal insets the renderer adds to every text box (points, per side)
TEXT_PADDING_H = 16
TEXT_PADDING_V = 12

DEFAULT_LINE_HEIGHT = 1.2

# Lines longer than this are hard to read
MAX_CHARS_PER_LINE = 80

# Fraction of the box a solved font size must fit in
FIT_GUARD_BAND = 0.9


# =============================================================================
# WIDTH / HEIGHT ESTIMATION
# =============================================================================

def _is_blank(text: Optional[str]) -> bool:
    return not text or not text.strip()


def estimate_width(
    text: str,
    font_size: float,
    include_safety_margin: bool = True,
) -> float:
    """
    Estimate the width of text in points.

    Args:
        text: Text content, may contain explicit line breaks
        font_size: Font size in points
        include_safety_margin: Inflate by WIDTH_SAFETY_MARGIN

    Returns:
        Estimated width in points, 0 for blank text
    """
    if _is_blank(text):
        return 0.0

    longest_line = max(len(line) for line in text.split("\n"))
    base_width = longest_line * font_size * AVG_CHAR_WIDTH_FACTOR
    with_padding = base_width + TEXT_PADDING_H * 2

    if include_safety_margin:
        return with_padding * (1 + WIDTH_SAFETY_MARGIN)
    return with_padding


def chars_per_line(font_size: float, max_width: float) -> int:
    """Characters that fit on one line of a box max_width wide (at least 1)."""
    char_width = max(font_size, 0.1) * WRAP_CHAR_WIDTH_FACTOR
    available_width = max_width - TEXT_PADDING_H * 2
    return max(1, math.floor(available_width / char_width))


def wrapped_line_count(
    text: str,
    font_size: float,
    max_width: Optional[float] = None,
) -> int:
    """
    Count the lines text occupies, simulating word wrap when max_width is given.

    Empty lines still take one line.
    """
    if _is_blank(text):
        return 0

    lines = text.split("\n")
    if max_width is None or max_width <= 0:
        return len(lines)

    max_chars = chars_per_line(font_size, max_width)
    effective_chars = max(1, math.floor(max_chars * WORD_BOUNDARY_FACTOR))

    total = 0
    for line in lines:
        if len(line) <= max_chars:
            total += 1
        else:
            total += math.ceil(len(line) / effective_chars)
    return total


def estimate_height(
    text: str,
    font_size: float,
    line_height: float = DEFAULT_LINE_HEIGHT,
    max_width: Optional[float] = None,
    include_safety_margin: bool = True,
) -> float:
    """
    Estimate the height of text in points.

    Args:
        text: Text content
        font_size: Font size in points
        line_height: Line height multiplier
        max_width: Box width to wrap at; no wrapping when None
        include_safety_margin: Inflate by the height safety margin

    Returns:
        Estimated height in points, 0 for blank text
    """
    if _is_blank(text):
        return 0.0

    explicit_lines = len(text.split("\n"))
    total_lines = wrapped_line_count(text, font_size, max_width)

    base_height = total_lines * font_size * line_height
    with_padding = base_height + TEXT_PADDING_V * 2

    if not include_safety_margin:
        return with_padding

    # The wrap estimate is already conservative, so wrapped text gets less margin
    if max_width is not None and total_lines > explicit_lines:
        return with_padding * (1 + WRAPPED_HEIGHT_SAFETY_MARGIN)
    return with_padding * (1 + HEIGHT_SAFETY_MARGIN)


def required_box_size(
    text: str,
    font_size: float,
    line_height: float = DEFAULT_LINE_HEIGHT,
    max_width: Optional[float] = None,
) -> BoxSize:
    """
    Minimum box that holds the text without overflow.

    When the unwrapped width exceeds max_width the width is capped and the
    height is recomputed with wrapping, so a narrow box yields a tall result.
    The caller compares the result with the box it has; nothing is truncated.
    """
    if _is_blank(text):
        return BoxSize(width=0.0, height=0.0)

    width = estimate_width(text, font_size)
    if max_width is not None and width > max_width:
        width = max_width

    height = estimate_height(text, font_size, line_height, width)
    return BoxSize(width=width, height=height)


def text_fits(
    text: str,
    font_size: float,
    max_width: float,
    max_height: float,
    line_height: float = DEFAULT_LINE_HEIGHT,
) -> bool:
    """Check if text fits a box at the given font size (safety margins included)."""
    width = estimate_width(text, font_size)
    height = estimate_height(text, font_size, line_height, max_width)
    return width <= max_width and height <= max_height


# =============================================================================
# FONT SIZE SOLVING
# =============================================================================

def solve_font_size_for_box(
    text: str,
    max_width: float,
    max_height: float,
    min_font_size: float = MIN_FONT_SIZE_PT,
    max_font_size: float = MAX_FONT_SIZE_PT,
    line_height: float = DEFAULT_LINE_HEIGHT,
) -> float:
    """
    Find the largest font size at which text fits a box.

    Binary search over whole-point steps from min_font_size, then a guard
    band pass: if the estimate uses more than FIT_GUARD_BAND of the box the
    size is scaled down proportionally.

    Args:
        text: Text to fit
        max_width: Box width in points
        max_height: Box height in points
        min_font_size: Smallest acceptable size (never returned below this)
        max_font_size: Largest size to try
        line_height: Line height multiplier

    Returns:
        Font size rounded to one decimal, within [min_font_size, max_font_size]
    """
    if max_font_size < min_font_size:
        min_font_size, max_font_size = max_font_size, min_font_size

    if _is_blank(text):
        return round(max_font_size, 1)

    def fits(size: float) -> bool:
        return text_fits(text, size, max_width, max_height, line_height)

    # Search offsets from min_font_size: O(log(max - min)) iterations
    low, high = 0, int(math.floor(max_font_size - min_font_size))
    best = min_font_size
    while low <= high:
        mid = (low + high) // 2
        size = min_font_size + mid
        if fits(size):
            best = size
            low = mid + 1
        else:
            high = mid - 1

    # Guard band
    width = estimate_width(text, best)
    height = estimate_height(text, best, line_height, max_width)
    if width > max_width * FIT_GUARD_BAND or height > max_height * FIT_GUARD_BAND:
        scales = []
        if width > 0:
            scales.append(max_width * FIT_GUARD_BAND / width)
        if height > 0:
            scales.append(max_height * FIT_GUARD_BAND / height)
        if scales:
            best = best * min(scales)

    best = max(min_font_size, min(max_font_size, best))
    return max(round(best, 1), round(min_font_size, 1))
