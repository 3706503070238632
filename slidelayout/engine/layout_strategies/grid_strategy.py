"""
grid_strategy.py — Grid-based layout strategy.

Pattern: Elements arranged row-major in a near-square grid that fills the
canvas between its margins.
"""

import math
from dataclasses import replace
from typing import List, Sequence, Tuple

from .base_strategy import (
    BaseLayoutStrategy,
    StrategyResult,
    LayoutElement,
)
from ..data_models import CanvasSize


class GridStrategy(BaseLayoutStrategy):
    """
    Grid layout strategy for row/column arrangements.

    Key features:
    - cols = ceil(sqrt(n)), rows = ceil(n / cols)
    - Cells separated by the strategy gap
    - Each element keeps its size unless it is larger than its cell
    """

    def compute(
        self,
        elements: Sequence[LayoutElement],
        canvas: CanvasSize,
    ) -> StrategyResult:
        """Compute positions for grid layout."""
        if not elements:
            return StrategyResult(warnings=["No elements to layout"])

        columns, rows = self.grid_dimensions(len(elements))
        cell_width, cell_height = self._cell_size(canvas, columns, rows)

        placed: List[LayoutElement] = []
        for i, element in enumerate(elements):
            row = i // columns
            col = i % columns

            placed.append(replace(
                element,
                x=self.margin + col * (cell_width + self.gap),
                y=self.margin + row * (cell_height + self.gap),
                width=min(element.width, cell_width),
                height=min(element.height, cell_height),
            ))

        return StrategyResult(elements=placed)

    @staticmethod
    def grid_dimensions(num_elements: int) -> Tuple[int, int]:
        """Column and row count for num_elements."""
        columns = max(1, math.ceil(math.sqrt(num_elements)))
        rows = max(1, math.ceil(num_elements / columns))
        return columns, rows

    def _cell_size(self, canvas: CanvasSize, columns: int, rows: int) -> Tuple[float, float]:
        cell_width = (self.usable_width(canvas) - self.gap * (columns - 1)) / columns
        cell_height = (self.usable_height(canvas) - self.gap * (rows - 1)) / rows
        return max(cell_width, 0.0), max(cell_height, 0.0)
