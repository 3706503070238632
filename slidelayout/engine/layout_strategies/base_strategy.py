"""
base_strategy.py — Abstract base class for auto layout strategies.

All layout strategies inherit from BaseLayoutStrategy and implement
the compute() method to reposition a batch of elements that already
carry approximate sizes. Overlap resolution lives here too, since every
strategy can hand its result to it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence

from ..data_models import CanvasSize, Rectangle
from ..units import ELEMENT_GAP, MARGIN

# Bound on nudges per element in resolve_overlaps()
MAX_PLACEMENT_ATTEMPTS = 100


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass
class LayoutElement:
    """
    An element taking part in auto layout.

    Strategies return copies; the input elements are left untouched.
    """
    element_id: str

    # Position and size in points
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_rect(cls, element_id: str, rect: Rectangle) -> "LayoutElement":
        return cls(element_id=element_id, x=rect.x, y=rect.y, width=rect.width, height=rect.height)

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    @property
    def right_edge(self) -> float:
        return self.x + self.width

    @property
    def bottom_edge(self) -> float:
        return self.y + self.height

    def to_rect(self) -> Rectangle:
        return Rectangle(x=self.x, y=self.y, width=self.width, height=self.height)


@dataclass
class StrategyResult:
    """
    Result from strategy computation.

    unplaced lists the ids of elements overlap resolution gave up on; they
    keep their last tried position.
    """
    elements: List[LayoutElement] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    unplaced: List[str] = field(default_factory=list)

    def get_element_by_id(self, element_id: str) -> Optional[LayoutElement]:
        """Find an element by ID."""
        for elem in self.elements:
            if elem.element_id == element_id:
                return elem
        return None


# =============================================================================
# GEOMETRY HELPERS
# =============================================================================

def elements_overlap(e1: LayoutElement, e2: LayoutElement) -> bool:
    """Check if two elements overlap. Touching edges do not count."""
    return not (
        e1.right_edge <= e2.x or
        e2.right_edge <= e1.x or
        e1.bottom_edge <= e2.y or
        e2.bottom_edge <= e1.y
    )


def _outside_canvas(elem: LayoutElement, canvas: CanvasSize, margin: float) -> bool:
    return (
        elem.x < margin or
        elem.y < margin or
        elem.right_edge > canvas.width - margin or
        elem.bottom_edge > canvas.height - margin
    )


def _is_blocked(
    elem: LayoutElement,
    placed: Sequence[LayoutElement],
    canvas: CanvasSize,
    margin: float,
) -> bool:
    return _outside_canvas(elem, canvas, margin) or any(
        elements_overlap(elem, other) for other in placed
    )


def resolve_overlaps(
    elements: Sequence[LayoutElement],
    canvas: CanvasSize,
    margin: float = MARGIN,
    gap: float = ELEMENT_GAP,
    max_attempts: int = MAX_PLACEMENT_ATTEMPTS,
) -> StrategyResult:
    """
    Move elements until none overlaps an earlier one or leaves the canvas.

    Greedy and order-dependent: each element, in input order, is nudged down
    by gap; when it would pass the bottom margin it goes back to the top
    margin one column (gap + width) to the right. Each element gets at most
    max_attempts moves, so the loop always terminates.

    Returns:
        StrategyResult; elements that never found a free spot are listed in
        unplaced with a warning.
    """
    result = StrategyResult()

    for element in elements:
        candidate = replace(element)
        attempts = 0

        while attempts < max_attempts and _is_blocked(candidate, result.elements, canvas, margin):
            candidate.y += gap
            if candidate.bottom_edge > canvas.height - margin:
                # Column wrap
                candidate.y = margin
                candidate.x += gap + candidate.width
            attempts += 1

        if _is_blocked(candidate, result.elements, canvas, margin):
            result.unplaced.append(candidate.element_id)
            result.warnings.append(
                f"Could not place element '{candidate.element_id}' without overlap "
                f"after {max_attempts} attempts"
            )

        result.elements.append(candidate)

    return result


# =============================================================================
# BASE STRATEGY
# =============================================================================

class BaseLayoutStrategy(ABC):
    """
    Abstract base class for auto layout strategies.

    Each strategy knows how to arrange elements according to one pattern
    (grid, stack, flow) inside the canvas minus its margins.
    """

    def __init__(self, margin: float = MARGIN, gap: float = ELEMENT_GAP):
        self.margin = margin
        self.gap = gap

    @abstractmethod
    def compute(
        self,
        elements: Sequence[LayoutElement],
        canvas: CanvasSize,
    ) -> StrategyResult:
        """
        Compute new element positions.

        Args:
            elements: Elements with approximate sizes, in placement order
            canvas: Canvas to lay out on

        Returns:
            StrategyResult with repositioned copies of the elements
        """
        pass

    # =========================================================================
    # HELPER METHODS (Available to all strategies)
    # =========================================================================

    def usable_width(self, canvas: CanvasSize) -> float:
        return canvas.width - self.margin * 2

    def usable_height(self, canvas: CanvasSize) -> float:
        return canvas.height - self.margin * 2

    def resolve_overlaps(
        self,
        result: StrategyResult,
        canvas: CanvasSize,
    ) -> StrategyResult:
        """Run overlap resolution on a strategy result, keeping its warnings."""
        resolved = resolve_overlaps(result.elements, canvas, self.margin, self.gap)
        resolved.warnings = result.warnings + resolved.warnings
        return resolved
