# Slide Layout Engine
#
# LayoutEngine lives in slidelayout.engine.layout_engine and is not
# re-exported here: it pulls in the cache and constraints packages, which
# themselves import from this package.

from .units import (
    DEFAULT_CANVAS_HEIGHT_PT,
    DEFAULT_CANVAS_WIDTH_PT,
    EMU_PER_PT,
    pt_to_emu,
    emu_to_pt,
)

from .data_models import (
    Rectangle,
    EmuRect,
    BoxSize,
    CanvasSize,
    DEFAULT_CANVAS,
    ClampOutcome,
    ContentPreset,
    TextAlignment,
    PresetStyle,
    LayoutRef,
    CachedCanvasEntry,
    TextBoxSpec,
    PlacedTextBox,
    PlacedElement,
)

from .text_measure import (
    estimate_width,
    estimate_height,
    required_box_size,
    text_fits,
    solve_font_size_for_box,
)

from .smart_layout import (
    PRESET_RULES,
    PresetRule,
    SmartDefaults,
    detect_preset,
    preset_style,
    auto_size,
    canonical_offsets,
    recommended_y,
    apply_smart_defaults,
    plan_text_boxes,
    should_auto_stack,
)

from .layout_strategies import (
    LayoutElement,
    StrategyResult,
    resolve_overlaps,
    get_strategy,
)

__all__ = [
    # Units
    'DEFAULT_CANVAS_HEIGHT_PT',
    'DEFAULT_CANVAS_WIDTH_PT',
    'EMU_PER_PT',
    'pt_to_emu',
    'emu_to_pt',
    # Data models
    'Rectangle',
    'EmuRect',
    'BoxSize',
    'CanvasSize',
    'DEFAULT_CANVAS',
    'ClampOutcome',
    'ContentPreset',
    'TextAlignment',
    'PresetStyle',
    'LayoutRef',
    'CachedCanvasEntry',
    'TextBoxSpec',
    'PlacedTextBox',
    'PlacedElement',
    # Text measurement
    'estimate_width',
    'estimate_height',
    'required_box_size',
    'text_fits',
    'solve_font_size_for_box',
    # Smart layout
    'PRESET_RULES',
    'PresetRule',
    'SmartDefaults',
    'detect_preset',
    'preset_style',
    'auto_size',
    'canonical_offsets',
    'recommended_y',
    'apply_smart_defaults',
    'plan_text_boxes',
    'should_auto_stack',
    # Auto layout
    'LayoutElement',
    'StrategyResult',
    'resolve_overlaps',
    'get_strategy',
]
