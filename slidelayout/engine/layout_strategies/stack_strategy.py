"""
stack_strategy.py — Vertical stacking layout strategy.

Pattern: Elements placed top to bottom at the left margin, each one gap
below the previous element.
"""

from dataclasses import replace
from typing import List, Sequence

from .base_strategy import (
    BaseLayoutStrategy,
    StrategyResult,
    LayoutElement,
)
from ..data_models import CanvasSize


class StackStrategy(BaseLayoutStrategy):
    """
    Stack layout strategy for vertically stacked elements.

    Sizes are kept as given. A stack taller than the canvas runs off the
    bottom; resolve_overlaps() moves the overflow into a new column.
    """

    def compute(
        self,
        elements: Sequence[LayoutElement],
        canvas: CanvasSize,
    ) -> StrategyResult:
        """Compute positions for stacked elements."""
        if not elements:
            return StrategyResult(warnings=["No elements to layout"])

        placed: List[LayoutElement] = []
        warnings: List[str] = []
        current_y = self.margin

        for element in elements:
            placed.append(replace(element, x=self.margin, y=current_y))
            current_y += element.height + self.gap

        stack_bottom = current_y - self.gap
        if stack_bottom > canvas.height - self.margin:
            warnings.append(
                f"Stack height {stack_bottom:g}pt exceeds the canvas "
                f"({canvas.height - self.margin:g}pt usable)"
            )

        return StrategyResult(elements=placed, warnings=warnings)
