"""
layout_engine.py — Layout orchestrator.

The LayoutEngine ties the pieces together for one document:
1. Resolves the canvas size through the metadata cache (provider on a miss)
2. Plans text boxes with smart defaults (preset, style, size, position)
3. Clamps every rectangle into the canvas and converts it to EMU
4. Runs auto layout strategies and overlap resolution for shapes

It is also the Mutation Notifier's entry point: on_mutation() drops the
cached metadata of a document that was structurally changed.

Geometry problems never raise. Adjustments are reported through
ClampOutcome.warnings and StrategyResult.warnings.
"""

import logging
from typing import List, Optional, Sequence

from slidelayout.cache.canvas_cache import (
    CanvasMetadataCache,
    get_cached_canvas_size,
    get_cached_layouts,
)
from slidelayout.cache.providers import CanvasSizeProvider
from slidelayout.config import LayoutSettings, get_settings
from slidelayout.constraints.bounds import clamp_bounds, clamp_preserving_aspect_ratio
from slidelayout.constraints.snapping import snap_to_grid, vertical_gap as golden_gap

from .data_models import (
    CanvasSize,
    ContentPreset,
    LayoutRef,
    PlacedElement,
    PlacedTextBox,
    PresetStyle,
    TextBoxSpec,
)
from .layout_strategies import LayoutElement, StrategyResult, get_strategy
from .smart_layout import apply_smart_defaults, is_short_single_line, should_auto_stack
from .text_measure import DEFAULT_LINE_HEIGHT, required_box_size

logger = logging.getLogger(__name__)

DEFAULT_TEXT_BOX_WIDTH = 500

# Required height must beat the planned height by this much to replace it
# for short single-line text
HEIGHT_OVERRIDE_RATIO = 1.25


class LayoutEngine:
    """
    Places text boxes, shapes and images on a document's canvas.

    Usage:
        engine = LayoutEngine(HttpCanvasSizeProvider.from_settings(settings))
        boxes = await engine.place_text_boxes("doc-id", [TextBoxSpec(text="Hello")])
    """

    def __init__(
        self,
        provider: CanvasSizeProvider,
        cache: Optional[CanvasMetadataCache] = None,
        settings: Optional[LayoutSettings] = None,
    ):
        self.settings = settings or get_settings()
        self.provider = provider
        self.cache = cache or CanvasMetadataCache(ttl_seconds=self.settings.cache_ttl_seconds)

    # =========================================================================
    # CANVAS METADATA
    # =========================================================================

    async def canvas_size(self, document_id: str) -> CanvasSize:
        """Canvas size of a document, cached. Falls back to the configured default."""
        return await get_cached_canvas_size(
            self.cache, self.provider, document_id, self.settings.default_canvas
        )

    async def layouts(self, document_id: str) -> List[LayoutRef]:
        """Layouts of a document, cached. Empty when the provider fails."""
        return await get_cached_layouts(
            self.cache, self.provider, document_id, self.settings.default_canvas
        )

    def on_mutation(self, document_id: str) -> None:
        """Called after any structural change to a document."""
        self.cache.on_mutation(document_id)

    # =========================================================================
    # TEXT BOXES
    # =========================================================================

    def _snap(self, value: float) -> float:
        return snap_to_grid(value, self.settings.grid_size)

    def _start_x(
        self,
        specs: Sequence[TextBoxSpec],
        canvas: CanvasSize,
        start_x: Optional[float],
        default_width: float,
        center_horizontally: bool,
    ) -> float:
        if start_x is not None:
            return start_x
        if center_horizontally:
            # Center on the widest box of the batch
            widest = max(spec.width if spec.width is not None else default_width for spec in specs)
            return (canvas.width - widest) / 2
        return self.settings.margin

    async def place_text_boxes(
        self,
        document_id: str,
        specs: Sequence[TextBoxSpec],
        *,
        start_x: Optional[float] = None,
        start_y: Optional[float] = None,
        default_width: float = DEFAULT_TEXT_BOX_WIDTH,
        vertical_gap: Optional[float] = None,
        center_horizontally: bool = True,
    ) -> List[PlacedTextBox]:
        """
        Place a batch of text boxes, top to bottom.

        When no item has a y, or every supplied y is the same value, the
        batch is auto-stacked from start_y with golden-ratio gaps. A y that
        repeats is ignored; a y given by only one item is kept unless the
        stack has already passed it. Otherwise explicit y values are honoured
        and items without one go to their recommended y, never above the
        bottom of the previous auto-positioned item plus vertical_gap.

        Boxes that start with less than min_element_size left above the
        bottom margin are still clamped onto the canvas, flagged with
        overflowed=True and logged.

        Args:
            document_id: Document whose canvas is used
            specs: Text items in order
            start_x: Left edge for items without x (default: centered or margin)
            start_y: Top of the stack (default: the margin)
            default_width: Width assumed for centering items without a width
            vertical_gap: Gap after auto-positioned items outside auto-stacking
            center_horizontally: Center the batch when start_x is not given

        Returns:
            One PlacedTextBox per item, in input order
        """
        if not specs:
            return []

        canvas = await self.canvas_size(document_id)
        margin = self.settings.margin
        gap = vertical_gap if vertical_gap is not None else self.settings.element_gap

        y_values = [spec.y for spec in specs]
        auto_stack = should_auto_stack(y_values)
        supplied = sum(1 for y in y_values if y is not None)
        # A single supplied y is a floor for that box, a repeated one is ignored
        honour_lone_y = auto_stack and supplied == 1
        if auto_stack and supplied > 1:
            logger.debug("Using automatic vertical stacking (all boxes had the same y position)")

        x_start = self._start_x(specs, canvas, start_x, default_width, center_horizontally)
        current_y = self._snap(start_y if start_y is not None else margin)

        placed: List[PlacedTextBox] = []
        previous_preset: Optional[ContentPreset] = None

        for index, spec in enumerate(specs):
            explicit_y = spec.y if honour_lone_y or not auto_stack else None
            defaults = apply_smart_defaults(
                spec.text, index, explicit_y, previous_preset, spec.width, spec.height
            )
            previous_preset = defaults.preset

            style = PresetStyle(
                font_size=spec.font_size if spec.font_size is not None else defaults.style.font_size,
                bold=spec.bold if spec.bold is not None else defaults.style.bold,
                alignment=spec.alignment or defaults.style.alignment,
                color=spec.color or defaults.style.color,
            )

            requested_width = spec.width if spec.width is not None else defaults.width
            requested_height = spec.height if spec.height is not None else defaults.height

            required = required_box_size(
                spec.text, style.font_size, DEFAULT_LINE_HEIGHT, requested_width
            )
            width = self._snap(requested_width)
            height = requested_height
            if (
                not is_short_single_line(spec.text)
                or required.height > requested_height * HEIGHT_OVERRIDE_RATIO
            ):
                height = max(requested_height, required.height)
            height = self._snap(height)

            x = self._snap(spec.x if spec.x is not None else x_start)
            if auto_stack:
                y = current_y if explicit_y is None else max(self._snap(explicit_y), current_y)
            elif explicit_y is not None:
                y = self._snap(explicit_y)
            else:
                y = max(defaults.recommended_y, current_y)

            # Never taller than the space left below y
            available = canvas.height - y - margin
            overflowed = available < self.settings.min_element_size
            if overflowed:
                logger.warning(
                    "Text box %d of %s starts at y=%g with no room left on the canvas",
                    index, document_id, y,
                )
            height = min(height, available)

            bounds = clamp_bounds(
                x, y, width, height, canvas, margin, self.settings.min_element_size
            )

            if auto_stack:
                current_y = self._snap(
                    bounds.y + bounds.height + golden_gap(style.font_size, self.settings.grid_size)
                )
            elif explicit_y is None:
                current_y = self._snap(bounds.y + bounds.height + gap)

            placed.append(PlacedTextBox(
                index=index,
                text=spec.text,
                preset=defaults.preset,
                style=style,
                font_family=spec.font_family,
                bounds=bounds,
                emu=bounds.rect.to_emu(),
                recommended_y=defaults.recommended_y,
                auto_stacked=auto_stack,
                overflowed=overflowed,
                style_applied=spec.font_size is None and spec.bold is None,
            ))

        return placed

    # =========================================================================
    # SHAPES AND IMAGES
    # =========================================================================

    async def place_element(
        self,
        document_id: str,
        x: float,
        y: float,
        width: float,
        height: float,
    ) -> PlacedElement:
        """Clamp a shape into the canvas, sizing each axis independently."""
        canvas = await self.canvas_size(document_id)
        bounds = clamp_bounds(
            x, y, width, height, canvas,
            self.settings.margin, self.settings.min_element_size,
        )
        return PlacedElement(bounds=bounds, emu=bounds.rect.to_emu())

    async def place_image(
        self,
        document_id: str,
        x: float,
        y: float,
        width: float,
        height: float,
    ) -> PlacedElement:
        """Clamp an image into the canvas without distorting it."""
        canvas = await self.canvas_size(document_id)
        bounds = clamp_preserving_aspect_ratio(
            x, y, width, height, canvas,
            self.settings.margin, self.settings.min_element_size,
        )
        return PlacedElement(bounds=bounds, emu=bounds.rect.to_emu())

    async def auto_layout(
        self,
        document_id: str,
        elements: Sequence[LayoutElement],
        strategy: str = "flow",
        resolve: bool = True,
    ) -> StrategyResult:
        """
        Reposition elements with a named strategy (grid, stack or flow).

        Raises:
            ValueError: Unknown strategy name
        """
        layout_strategy = get_strategy(
            strategy, margin=self.settings.margin, gap=self.settings.element_gap
        )
        canvas = await self.canvas_size(document_id)

        result = layout_strategy.compute(elements, canvas)
        if resolve and result.elements:
            result = layout_strategy.resolve_overlaps(result, canvas)

        if result.unplaced:
            logger.warning(
                "Auto layout of %s left %d element(s) overlapping: %s",
                document_id, len(result.unplaced), ", ".join(result.unplaced),
            )
        return result
