"""
smart_layout.py — Content-aware defaults for text boxes.

Given raw text and whatever the caller did specify, the planner decides:
- What role the text plays (title, subtitle, body, metric, bullet)
- How it should be styled (font size, weight, alignment, color)
- How big its box should be, snapped to the 8pt grid
- Where it should sit vertically when no y was given

Preset detection is an ordered list of rules, first match wins. Each rule
can be inspected and tested on its own through PRESET_RULES.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple

from slidelayout.constraints.snapping import snap_to_grid

from .data_models import ContentPreset, PresetStyle, TextAlignment, TextBoxSpec
from .text_measure import DEFAULT_LINE_HEIGHT, required_box_size
from .units import (
    BODY_FONT_SIZE_PT,
    HEADLINE_FONT_SIZE_PT,
    MAX_ELEMENT_SIZE,
    METRIC_FONT_SIZE_PT,
    MUTED_TEXT_COLOR,
    SUBTITLE_FONT_SIZE_PT,
    clamp,
)

# =============================================================================
# PRESET DETECTION
# =============================================================================

METRIC_MAX_LENGTH = 20
SHORT_TITLE_MAX_LENGTH = 50
LONG_BODY_MIN_LENGTH = 100

# Vertical bands (points from the top of the canvas)
TITLE_BAND_END = 80
SHORT_TITLE_BAND_END = 100
SUBTITLE_BAND_END = 150

_METRIC_RE = re.compile(r"\d|%")
_BULLET_RE = re.compile(r"^[•\-*+]")


@dataclass(frozen=True)
class PresetContext:
    """What preset detection gets to look at for one text item."""
    text: str
    index: int
    y: Optional[float] = None
    previous_preset: Optional[ContentPreset] = None


class PresetRule(NamedTuple):
    name: str
    predicate: Callable[[PresetContext], bool]
    preset: ContentPreset


def _is_metric(ctx: PresetContext) -> bool:
    return len(ctx.text) < METRIC_MAX_LENGTH and bool(_METRIC_RE.search(ctx.text))


def _is_bullet(ctx: PresetContext) -> bool:
    return bool(_BULLET_RE.match(ctx.text.strip()))


def _is_title(ctx: PresetContext) -> bool:
    if ctx.index == 0:
        return True
    if ctx.y is None:
        return False
    return ctx.y < TITLE_BAND_END or (
        len(ctx.text) < SHORT_TITLE_MAX_LENGTH and ctx.y < SHORT_TITLE_BAND_END
    )


def _is_subtitle(ctx: PresetContext) -> bool:
    return (
        ctx.index == 1
        or ctx.previous_preset == ContentPreset.TITLE
        or (ctx.y is not None and TITLE_BAND_END <= ctx.y < SUBTITLE_BAND_END)
    )


def _is_long_or_low(ctx: PresetContext) -> bool:
    return len(ctx.text) > LONG_BODY_MIN_LENGTH or (
        ctx.y is not None and ctx.y >= SUBTITLE_BAND_END
    )


# Evaluated in order; keep the catch-all last
PRESET_RULES: List[PresetRule] = [
    PresetRule("metric", _is_metric, ContentPreset.METRIC),
    PresetRule("bullet", _is_bullet, ContentPreset.BULLET),
    PresetRule("title", _is_title, ContentPreset.TITLE),
    PresetRule("subtitle", _is_subtitle, ContentPreset.SUBTITLE),
    PresetRule("body", _is_long_or_low, ContentPreset.BODY),
    PresetRule("default", lambda ctx: True, ContentPreset.BODY),
]


def detect_preset(
    text: str,
    index: int,
    y: Optional[float] = None,
    previous_preset: Optional[ContentPreset] = None,
) -> ContentPreset:
    """
    Infer the role of a text item.

    Args:
        text: Text content
        index: Position of the item in its batch
        y: Requested top edge, if any
        previous_preset: Preset of the item before this one

    Returns:
        The preset of the first matching rule in PRESET_RULES
    """
    ctx = PresetContext(text=text, index=index, y=y, previous_preset=previous_preset)
    for rule in PRESET_RULES:
        if rule.predicate(ctx):
            return rule.preset
    return ContentPreset.BODY


# =============================================================================
# PRESET STYLES
# =============================================================================

PRESET_STYLES: Dict[ContentPreset, PresetStyle] = {
    ContentPreset.TITLE: PresetStyle(
        font_size=HEADLINE_FONT_SIZE_PT, bold=True, alignment=TextAlignment.CENTER,
    ),
    ContentPreset.SUBTITLE: PresetStyle(
        font_size=SUBTITLE_FONT_SIZE_PT, bold=True, alignment=TextAlignment.CENTER,
        color=MUTED_TEXT_COLOR,
    ),
    ContentPreset.METRIC: PresetStyle(
        font_size=METRIC_FONT_SIZE_PT, bold=True, alignment=TextAlignment.CENTER,
    ),
    ContentPreset.BULLET: PresetStyle(
        font_size=BODY_FONT_SIZE_PT, bold=False, alignment=TextAlignment.START,
    ),
    ContentPreset.BODY: PresetStyle(
        font_size=BODY_FONT_SIZE_PT, bold=False, alignment=TextAlignment.START,
    ),
}


def preset_style(preset: ContentPreset) -> PresetStyle:
    """Default style for a preset."""
    return PRESET_STYLES.get(ContentPreset(preset), PRESET_STYLES[ContentPreset.BODY])


# =============================================================================
# AUTO-SIZING
# =============================================================================

MIN_AUTO_WIDTH = 200
MAX_AUTO_WIDTH = MAX_ELEMENT_SIZE
AUTO_WIDTH_CHAR_FACTOR = 0.5

# Single-line text shorter than this gets a 2 x font size box
SHORT_LINE_MAX_LENGTH = 30


def is_short_single_line(text: str) -> bool:
    return "\n" not in text and len(text) < SHORT_LINE_MAX_LENGTH


def auto_size(
    text: str,
    font_size: float,
    requested_width: Optional[float] = None,
    requested_height: Optional[float] = None,
) -> Tuple[float, float]:
    """
    Box size for text, honouring explicit dimensions verbatim.

    Returns:
        (width, height) in points; computed values are grid-snapped
    """
    if requested_width is not None:
        width = requested_width
    else:
        estimated = len(text) * font_size * AUTO_WIDTH_CHAR_FACTOR
        width = snap_to_grid(clamp(estimated, MIN_AUTO_WIDTH, MAX_AUTO_WIDTH))

    if requested_height is not None:
        height = requested_height
    else:
        if is_short_single_line(text):
            height = font_size * 2
        else:
            height = required_box_size(text, font_size, DEFAULT_LINE_HEIGHT, width).height
        height = snap_to_grid(height)

    return width, height


# =============================================================================
# VERTICAL POSITIONS
# =============================================================================

# Canonical offsets of the golden-ratio progression, starting at 32pt for
# the title. Kept as constants: they are what the rest of the deck uses.
TITLE_Y = 32
SUBTITLE_Y = 88
BODY_Y = 136


def canonical_offsets() -> Dict[ContentPreset, float]:
    """Recommended top edge per preset, grid-snapped."""
    body_y = snap_to_grid(BODY_Y)
    return {
        ContentPreset.TITLE: snap_to_grid(TITLE_Y),
        ContentPreset.SUBTITLE: snap_to_grid(SUBTITLE_Y),
        ContentPreset.BODY: body_y,
        ContentPreset.METRIC: body_y,
        ContentPreset.BULLET: body_y,
    }


def recommended_y(preset: ContentPreset, y: Optional[float] = None) -> float:
    """Snapped y when given, otherwise the canonical offset for the preset."""
    if y is not None:
        return snap_to_grid(y)
    return canonical_offsets()[ContentPreset(preset)]


# =============================================================================
# SMART DEFAULTS
# =============================================================================

@dataclass(frozen=True)
class SmartDefaults:
    """Planner output for one text item."""
    preset: ContentPreset
    style: PresetStyle
    width: float
    height: float
    recommended_y: float


def apply_smart_defaults(
    text: str,
    index: int,
    y: Optional[float] = None,
    previous_preset: Optional[ContentPreset] = None,
    requested_width: Optional[float] = None,
    requested_height: Optional[float] = None,
) -> SmartDefaults:
    """Detect the preset of a text item and derive its style, size and position."""
    preset = detect_preset(text, index, y, previous_preset)
    style = preset_style(preset)
    width, height = auto_size(text, style.font_size, requested_width, requested_height)
    return SmartDefaults(
        preset=preset,
        style=style,
        width=width,
        height=height,
        recommended_y=recommended_y(preset, y),
    )


def plan_text_boxes(specs: Sequence[TextBoxSpec]) -> List[SmartDefaults]:
    """Apply smart defaults to a batch, each preset feeding the next detection."""
    plans: List[SmartDefaults] = []
    previous: Optional[ContentPreset] = None
    for index, spec in enumerate(specs):
        plan = apply_smart_defaults(
            spec.text, index, spec.y, previous, spec.width, spec.height
        )
        plans.append(plan)
        previous = plan.preset
    return plans


# =============================================================================
# AUTO-STACKING POLICY
# =============================================================================

def should_auto_stack(y_values: Sequence[Optional[float]]) -> bool:
    """
    Decide whether a batch is stacked automatically instead of placed literally.

    True when no item has a y, or when every supplied y is the same value.
    A batch of boxes all at one y is almost always a copy-pasted default,
    and placing them literally would pile them on top of each other.
    """
    supplied = [y for y in y_values if y is not None]
    return len(set(supplied)) <= 1
