"""Text fitting helpers: wrapping, splitting and density checks. Text is never truncated."""

import math
import re
from dataclasses import dataclass, field

from slidelayout.engine.data_models import BoxSize
from slidelayout.engine.text_measure import (
    AVG_CHAR_WIDTH_FACTOR,
    DEFAULT_LINE_HEIGHT,
    MAX_CHARS_PER_LINE,
    TEXT_PADDING_H,
    required_box_size,
    solve_font_size_for_box,
)

MAX_TEXT_LENGTH_PER_BOX = 500
MAX_LINES_PER_TEXT_BOX = 15

TITLE_BOX_HEIGHT = 80
TITLE_FONT_RANGE = (24, 44)
BODY_FONT_RANGE = (10, 14)

_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    '"': '"',
    "'": "'",
}
_ESCAPE_RE = re.compile(r"\\([ntr\\\"'])")


@dataclass
class DensityReport:
    """Outcome of validate_text_density()."""

    valid: bool
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    recommended_size: BoxSize | None = None


def unescape_text(text: str) -> str:
    """Turn literal escape sequences (as sent in JSON tool arguments) into characters."""
    if not text:
        return text
    return _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(1)], text)


def wrap_text(text: str, max_width: float, font_size: float) -> list[str]:
    """Greedy word wrap of text into lines that fit max_width.

    Words longer than a line are hard-broken.

    Args:
        text: Text content, may contain explicit line breaks.
        max_width: Box width in points.
        font_size: Font size in points.

    Returns:
        Wrapped lines.
    """
    if not text:
        return []

    char_width = max(font_size, 0.1) * AVG_CHAR_WIDTH_FACTOR
    max_chars = max(1, math.floor((max_width - TEXT_PADDING_H * 2) / char_width))

    lines: list[str] = []
    for paragraph in text.split("\n"):
        if len(paragraph) <= max_chars:
            lines.append(paragraph)
            continue

        current = ""
        for word in paragraph.split():
            candidate = f"{current} {word}" if current else word
            if len(candidate) <= max_chars:
                current = candidate
                continue

            if current:
                lines.append(current)
            while len(word) > max_chars:
                lines.append(word[:max_chars])
                word = word[max_chars:]
            current = word

        if current:
            lines.append(current)

    return lines


def split_text_to_slides(
    text: str,
    max_lines_per_slide: int = MAX_LINES_PER_TEXT_BOX,
    font_size: float = 14,
    max_width: float = 600,
) -> list[str]:
    """Split long text into chunks that each fit one slide's text box."""
    if not text:
        return []

    lines = wrap_text(text, max_width, font_size)
    step = max(1, max_lines_per_slide)
    return ["\n".join(lines[i:i + step]) for i in range(0, len(lines), step)]


def validate_text_density(
    text: str,
    font_size: float,
    max_width: float,
    max_height: float,
) -> DensityReport:
    """Check that text is readable in a box, suggesting fixes instead of truncating.

    Args:
        text: Text content.
        font_size: Font size in points.
        max_width: Box width in points.
        max_height: Box height in points.

    Returns:
        DensityReport, valid when no warning fired.
    """
    warnings: list[str] = []
    suggestions: list[str] = []

    if len(text) > MAX_TEXT_LENGTH_PER_BOX:
        warnings.append(
            f"Text length ({len(text)}) exceeds recommended maximum "
            f"({MAX_TEXT_LENGTH_PER_BOX} characters)"
        )
        suggestions.append("Consider splitting content across multiple slides or text boxes")

    lines = text.split("\n")
    if len(lines) > MAX_LINES_PER_TEXT_BOX:
        warnings.append(
            f"Text has {len(lines)} lines, exceeding recommended maximum ({MAX_LINES_PER_TEXT_BOX})"
        )
        suggestions.append("Consider reducing content or splitting into multiple text boxes")

    required = required_box_size(text, font_size, DEFAULT_LINE_HEIGHT, max_width)
    if required.width > max_width or required.height > max_height:
        need_w = math.ceil(required.width)
        need_h = math.ceil(required.height)
        warnings.append(
            f"Text requires {need_w}pt x {need_h}pt but box is {max_width:g}pt x {max_height:g}pt"
        )
        suggestions.append(
            f"Increase box size to at least {need_w}pt x {need_h}pt, or reduce font size"
        )

    long_lines = [line for line in lines if len(line) > MAX_CHARS_PER_LINE]
    if long_lines:
        warnings.append(
            f"{len(long_lines)} line(s) exceed {MAX_CHARS_PER_LINE} characters (may be hard to read)"
        )
        suggestions.append("Consider breaking long lines or adding line breaks")

    return DensityReport(
        valid=not warnings,
        warnings=warnings,
        suggestions=suggestions,
        recommended_size=required,
    )


def title_font_size(text: str, max_width: float) -> float:
    """Font size for a title in a standard title band."""
    low, high = TITLE_FONT_RANGE
    return solve_font_size_for_box(text, max_width, TITLE_BOX_HEIGHT, low, high)


def body_font_size(text: str, max_width: float, max_height: float) -> float:
    """Font size for body text in the given box."""
    low, high = BODY_FONT_RANGE
    return solve_font_size_for_box(text, max_width, max_height, low, high)
