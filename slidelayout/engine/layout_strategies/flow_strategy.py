"""
flow_strategy.py — Left-to-right flow layout strategy.

Pattern: Elements placed in reading order, wrapping to a new row when the
next element would cross the right margin.
"""

from dataclasses import replace
from typing import List, Sequence

from .base_strategy import (
    BaseLayoutStrategy,
    StrategyResult,
    LayoutElement,
)
from ..data_models import CanvasSize


class FlowStrategy(BaseLayoutStrategy):
    """
    Flow layout strategy, like words in a paragraph.

    Key features:
    - Rows start at the left margin
    - A new row starts one gap below the tallest element of the previous row
    - An element wider than a row still gets a row of its own
    """

    def compute(
        self,
        elements: Sequence[LayoutElement],
        canvas: CanvasSize,
    ) -> StrategyResult:
        """Compute positions for flow layout."""
        if not elements:
            return StrategyResult(warnings=["No elements to layout"])

        right_limit = canvas.width - self.margin
        current_x = self.margin
        current_y = self.margin
        row_height = 0.0

        placed: List[LayoutElement] = []
        for element in elements:
            # Wrap, unless the row is still empty
            if current_x + element.width > right_limit and current_x > self.margin:
                current_x = self.margin
                current_y += row_height + self.gap
                row_height = 0.0

            placed.append(replace(element, x=current_x, y=current_y))

            current_x += element.width + self.gap
            row_height = max(row_height, element.height)

        return StrategyResult(elements=placed)
